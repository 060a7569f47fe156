"""
Pro-tier endpoints.

Gated by the X-Cardinal-Tier header (see middleware.tier).
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from cardinal.analysis import JobIntelAnalyst
from cardinal.api.dependencies import get_job_intel_analyst, get_pricing_config
from cardinal.api.middleware.tier import require_pro_tier
from cardinal.api.models import JobIntelRequest
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.pricing import AdminConfig, quote_for_scores, score_summary
from cardinal.utils.error_sanitizer import get_safe_error_detail

router = APIRouter(prefix="/pro", tags=["pro"])
logger = get_logger(__name__)


@router.post("/job-intel")
def job_intel(
    request: JobIntelRequest,
    tier: str = Depends(require_pro_tier),
    analyst: JobIntelAnalyst = Depends(get_job_intel_analyst),
    config: AdminConfig = Depends(get_pricing_config),
) -> dict[str, Any]:
    """
    Crew plan for a described job, with heuristic scores and a quote.

    Scores come from the caller's own description, so the brief can account
    for the risk the text implies.
    """
    scores = score_summary(request.text)
    quote = quote_for_scores(
        scores,
        sqft=request.sqft,
        base_type=request.base_type,
        complexity=request.complexity,
        config=config,
    )

    try:
        intel = analyst.brief(
            request.text,
            job_type=request.base_type,
            complexity=request.complexity,
            sqft=request.sqft,
            risk_pct=scores.risk_pct,
        )
    except Exception as e:
        counter("api.job_intel.error")
        log_event("api.job_intel.failure", error=type(e).__name__, tier=tier)
        logger.error("Job intel failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail=get_safe_error_detail(e, context="Job intel failed"),
        ) from None

    counter("api.job_intel.success")
    return {
        "ok": True,
        "tier": tier,
        "intel": intel.to_dict(),
        "scores": scores.to_dict(),
        "quote": quote.to_dict() if quote else None,
    }
