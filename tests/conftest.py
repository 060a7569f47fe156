"""
Pytest configuration shared across all test files

Rate limits are raised before cardinal is imported so the API suite never
trips the per-IP limiter. CORS origins are left unset, which allows any origin.
"""

from __future__ import annotations

import os

os.environ.setdefault("CARDINAL_RATE_LIMIT_RPM", "100000")
os.environ.setdefault("CARDINAL_RATE_LIMIT_RPH", "1000000")
os.environ.setdefault("CARDINAL_ENV", "development")
os.environ["CARDINAL_CORS_ORIGINS"] = ""

import pytest  # noqa: E402

from cardinal.pricing import clear_admin_config_cache  # noqa: E402
from cardinal.storage import get_signup_log  # noqa: E402


@pytest.fixture(autouse=True)
def clean_signup_log():
    """Every test starts with an empty signup log"""
    get_signup_log().clear()
    yield
    get_signup_log().clear()


@pytest.fixture
def admin_env(monkeypatch):
    """Set CARDINAL_ADMIN_MULTIPLIER for one test and rebuild the cached config"""

    def _set(value: str):
        monkeypatch.setenv("CARDINAL_ADMIN_MULTIPLIER", value)
        clear_admin_config_cache()

    yield _set
    clear_admin_config_cache()
