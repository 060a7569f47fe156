"""Health check and debug endpoints for Cardinal Calculator.

- /health - Service health including model credential presence
- /debug/stats - Aggregate counters and latencies (no PII)
"""

from __future__ import annotations

import os
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from cardinal.config import APP_NAME, APP_VERSION, ENV
from cardinal.observability.telemetry import get_all_latency_stats, get_counters
from cardinal.storage import get_signup_log

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint.

    Returns service status, version, and credential readiness for
    Gemini and speech synthesis (only checks presence, makes no API call).
    """
    has_api_key = bool(os.getenv("GOOGLE_API_KEY"))
    has_project = bool(os.getenv("GOOGLE_CLOUD_PROJECT"))
    has_openai_key = bool(os.getenv("OPENAI_API_KEY"))

    return {
        "status": "healthy",
        "service": APP_NAME,
        "version": APP_VERSION,
        "environment": ENV,
        "timestamp": datetime.now(UTC).isoformat(),
        "llm": {
            "ready": has_api_key or has_project,
            "google_api_key": has_api_key,
            "google_cloud_project": has_project,
        },
        "speech": {"ready": has_openai_key},
    }


@router.get("/debug/stats")
async def debug_stats() -> dict[str, Any]:
    """Aggregate system statistics for debugging. Contains no PII."""
    return {
        "signups": get_signup_log().count(),
        "counters": get_counters(),
        "latency": get_all_latency_stats(),
        "timestamp": datetime.now(UTC).isoformat(),
    }
