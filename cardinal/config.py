"""Centralized configuration for the Cardinal Calculator backend.

Re-exports everything from cardinal.infrastructure.settings so callers can
import a single module, then adds typed constants for LLM, upload,
rate-limiting and tier settings.  Environment variable overrides use safe
defaults so the app starts without extra env configuration.
"""

from __future__ import annotations

import os

from cardinal.infrastructure.settings import *  # noqa: F401, F403 - re-export existing

# --- App ---
APP_NAME: str = "Cardinal Calculator"
APP_VERSION: str = "1.0.0"

# --- LLM ---
LLM_TIMEOUT_SECONDS: int = int(os.getenv("CARDINAL_LLM_TIMEOUT", "30"))
LLM_MAX_RETRIES: int = int(os.getenv("CARDINAL_LLM_MAX_RETRIES", "3"))
LLM_INPUT_MAX_CHARS: int = 4000

# --- Uploads ---
MAX_UPLOAD_BYTES: int = int(os.getenv("CARDINAL_MAX_UPLOAD_MB", "10")) * 1024 * 1024
ALLOWED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/png", "image/webp", "image/heic"}
)

# --- Speech ---
SPEECH_MAX_CHARS: int = 4096

# --- Rate Limiting ---
RATE_LIMIT_RPM: int = int(os.getenv("CARDINAL_RATE_LIMIT_RPM", "60"))
RATE_LIMIT_RPH: int = int(os.getenv("CARDINAL_RATE_LIMIT_RPH", "1000"))
RATE_LIMIT_MAX_IPS: int = 10000

# --- Tiers ---
TIER_HEADER: str = "X-Cardinal-Tier"
PRO_TIERS: frozenset[str] = frozenset({"pro", "enterprise"})
