"""
Yard analysis endpoints.

/analyze-image takes a photo, /inference takes a written description. Both
run the model, score its summary with the keyword heuristic and, when square
footage and job type are known, attach a price quote.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from cardinal.analysis import YardAnalyzer, YardAssessment
from cardinal.api.dependencies import get_pricing_config, get_yard_analyzer
from cardinal.api.models import InferenceRequest
from cardinal.config import ALLOWED_IMAGE_TYPES, MAX_UPLOAD_BYTES
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.pricing import AdminConfig, PricingError, quote_for_scores, score_summary
from cardinal.utils.error_sanitizer import get_safe_error_detail

router = APIRouter(tags=["analysis"])
logger = get_logger(__name__)


def build_analysis_payload(
    assessment: YardAssessment,
    config: AdminConfig,
    sqft: float | None = None,
    base_type: str | None = None,
    complexity: str | None = None,
) -> dict[str, Any]:
    """Combine a model assessment with heuristic scores and an optional quote.

    Caller-supplied sqft, base_type and complexity win over what the model inferred.
    """
    scores = score_summary(assessment.summary)

    payload: dict[str, Any] = {"ok": True, **assessment.to_dict(), **scores.to_dict()}
    payload["estimatedSqft"] = sqft or assessment.estimated_sqft
    payload["jobType"] = base_type or assessment.job_type
    payload["complexity"] = complexity or assessment.complexity

    quote = quote_for_scores(
        scores,
        sqft=payload["estimatedSqft"],
        base_type=payload["jobType"],
        complexity=payload["complexity"],
        config=config,
    )
    payload["quote"] = quote.to_dict() if quote else None
    return payload


@router.post("/analyze-image")
def analyze_image(
    file: UploadFile = File(...),
    analyzer: YardAnalyzer = Depends(get_yard_analyzer),
    config: AdminConfig = Depends(get_pricing_config),
) -> dict[str, Any]:
    """Analyze an uploaded yard photo."""
    data = file.file.read(MAX_UPLOAD_BYTES + 1)
    if not data:
        raise HTTPException(status_code=400, detail="Missing required field: file")

    content_type = (file.content_type or "").lower()
    if content_type not in ALLOWED_IMAGE_TYPES:
        counter("api.analyze_image.unsupported_type")
        raise HTTPException(status_code=415, detail=f"Unsupported file type: {content_type or 'unknown'}")

    if len(data) > MAX_UPLOAD_BYTES:
        counter("api.analyze_image.too_large")
        raise HTTPException(status_code=413, detail="Image is too large")

    try:
        assessment = analyzer.analyze_photo(data, content_type)
        payload = build_analysis_payload(assessment, config)
    except PricingError:
        raise
    except Exception as e:
        counter("api.analyze_image.error")
        log_event("api.analyze_image.failure", error=type(e).__name__)
        logger.error("Image analysis failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail=get_safe_error_detail(e, context="Image analysis failed"),
        ) from None

    counter("api.analyze_image.success")
    return payload


@router.post("/inference")
def inference(
    request: InferenceRequest,
    analyzer: YardAnalyzer = Depends(get_yard_analyzer),
    config: AdminConfig = Depends(get_pricing_config),
) -> dict[str, Any]:
    """Analyze a written yard description."""
    try:
        assessment = analyzer.analyze_text(request.text)
        payload = build_analysis_payload(
            assessment,
            config,
            sqft=request.sqft,
            base_type=request.base_type,
            complexity=request.complexity,
        )
    except PricingError:
        raise
    except Exception as e:
        counter("api.inference.error")
        log_event("api.inference.failure", error=type(e).__name__)
        logger.error("Text inference failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail=get_safe_error_detail(e, context="Inference failed"),
        ) from None

    counter("api.inference.success")
    return payload
