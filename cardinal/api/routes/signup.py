"""Email signup endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from cardinal.api.dependencies import get_signups
from cardinal.api.models import SignupRequest, SignupResponse
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter
from cardinal.storage import SignupLog
from cardinal.utils.error_sanitizer import sanitize_error_message
from cardinal.utils.validators import ValidationError

router = APIRouter(tags=["signup"])
logger = get_logger(__name__)


@router.post("/email", response_model=SignupResponse)
async def signup(
    request: SignupRequest,
    signups: SignupLog = Depends(get_signups),
) -> SignupResponse:
    """Record an early-access signup."""
    try:
        entry = signups.append(request.email, request.role)
    except ValidationError as e:
        counter("api.signup.invalid")
        raise HTTPException(status_code=400, detail=sanitize_error_message(str(e), 400)) from None

    counter("api.signup.success")
    return SignupResponse(
        email=entry.email,
        role=entry.role,
        timestamp=entry.timestamp.isoformat(),
        count=signups.count(),
    )
