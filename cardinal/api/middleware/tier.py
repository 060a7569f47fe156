"""
Subscription tier gate.

Callers declare their tier in the X-Cardinal-Tier header; endpoints that
need a paid tier depend on require_tier(...). There is no account lookup
behind the header.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import HTTPException, Request, status

from cardinal.config import PRO_TIERS, TIER_HEADER
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter

logger = get_logger(__name__)


def require_tier(*allowed: str) -> Callable[[Request], Awaitable[str]]:
    """
    Build a FastAPI dependency that admits only the given tiers.

    Usage:
        @router.post("/pro/thing")
        async def thing(tier: str = Depends(require_tier("pro", "enterprise"))):
            ...
    """
    allowed_tiers = frozenset(t.lower() for t in allowed) or PRO_TIERS

    async def check_tier(request: Request) -> str:
        tier = (request.headers.get(TIER_HEADER) or "").strip().lower()

        if not tier:
            counter("api.tier.missing")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Missing {TIER_HEADER} header",
            )

        if tier not in allowed_tiers:
            counter("api.tier.denied")
            logger.info("Tier %r denied for %s", tier, request.url.path)
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This endpoint requires one of these tiers: {', '.join(sorted(allowed_tiers))}",
            )

        return tier

    return check_tier


require_pro_tier = require_tier(*PRO_TIERS)
