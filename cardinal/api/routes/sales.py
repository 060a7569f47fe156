"""Sales script endpoint ("natty": a natural-sounding pitch)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cardinal.analysis import SalesScriptWriter, ScriptRequest
from cardinal.api.dependencies import get_sales_writer
from cardinal.api.models import SalesScriptRequest, SalesScriptResponse
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.utils.error_sanitizer import get_safe_error_detail

router = APIRouter(tags=["sales"])
logger = get_logger(__name__)


@router.post("/natty", response_model=SalesScriptResponse)
def natty(
    request: SalesScriptRequest,
    writer: SalesScriptWriter = Depends(get_sales_writer),
) -> SalesScriptResponse:
    try:
        script = writer.write(
            ScriptRequest(
                text=request.text,
                customer_name=request.customer_name,
                price=request.price,
                close_pct=request.close_pct,
                upsell_pct=request.upsell_pct,
                tone=request.tone,
            )
        )
    except Exception as e:
        counter("api.natty.error")
        log_event("api.natty.failure", error=type(e).__name__)
        logger.error("Sales script generation failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail=get_safe_error_detail(e, context="Sales script generation failed"),
        ) from None

    counter("api.natty.success")
    return SalesScriptResponse(script=script)
