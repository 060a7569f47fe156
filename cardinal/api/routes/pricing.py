"""
Pricing endpoints.

Pure arithmetic over the admin config; no model calls. Unknown job types and
complexities surface as PricingError, which the app turns into a 400.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from cardinal.api.dependencies import get_pricing_config
from cardinal.api.models import PriceRequest, PriceResponse
from cardinal.observability.telemetry import counter, log_event
from cardinal.pricing import AdminConfig, PriceInput, estimate_price

router = APIRouter(prefix="/price", tags=["pricing"])


@router.post("", response_model=PriceResponse)
async def price(
    request: PriceRequest,
    config: AdminConfig = Depends(get_pricing_config),
) -> PriceResponse:
    quote = estimate_price(
        PriceInput(
            sqft=request.sqft,
            base_type=request.base_type,
            complexity=request.complexity,
            risk_level=request.risk_level,
            upsell_score=request.upsell_score,
        ),
        config,
    )

    counter("api.price.success")
    log_event(
        "api.price.quote",
        base_type=request.base_type,
        complexity=request.complexity,
        target=quote.band.target,
    )
    return PriceResponse.model_validate({"ok": True, **quote.to_dict()})


@router.get("/config")
async def price_config(config: AdminConfig = Depends(get_pricing_config)) -> dict[str, Any]:
    """Read-only view of rates and multipliers."""
    return {"ok": True, "config": config.to_dict()}
