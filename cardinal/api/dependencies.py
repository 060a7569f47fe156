"""
Service providers for route handlers.

Routes receive their services through FastAPI's Depends so tests can swap
in fakes with app.dependency_overrides.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache

from cardinal.analysis import JobIntelAnalyst, SalesScriptWriter, YardAnalyzer
from cardinal.llm.speech import synthesize_speech
from cardinal.pricing import AdminConfig, get_admin_config
from cardinal.storage import SignupLog, get_signup_log


@lru_cache(maxsize=1)
def get_yard_analyzer() -> YardAnalyzer:
    return YardAnalyzer()


@lru_cache(maxsize=1)
def get_sales_writer() -> SalesScriptWriter:
    return SalesScriptWriter()


@lru_cache(maxsize=1)
def get_job_intel_analyst() -> JobIntelAnalyst:
    return JobIntelAnalyst()


def get_speech_synthesizer() -> Callable[[str, str | None], bytes]:
    return synthesize_speech


def get_pricing_config() -> AdminConfig:
    return get_admin_config()


def get_signups() -> SignupLog:
    return get_signup_log()
