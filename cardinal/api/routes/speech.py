"""Text-to-speech endpoint."""

from __future__ import annotations

from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Response

from cardinal.api.dependencies import get_speech_synthesizer
from cardinal.api.models import SpeakRequest
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, log_event
from cardinal.utils.error_sanitizer import get_safe_error_detail

router = APIRouter(tags=["speech"])
logger = get_logger(__name__)


@router.post("/speak", response_class=Response)
def speak(
    request: SpeakRequest,
    synthesize: Callable[[str, str | None], bytes] = Depends(get_speech_synthesizer),
) -> Response:
    """Read text aloud. Returns MP3 bytes."""
    try:
        audio = synthesize(request.text, request.voice)
    except Exception as e:
        counter("api.speak.error")
        log_event("api.speak.failure", error=type(e).__name__)
        logger.error("Speech synthesis failed: %s", e)
        raise HTTPException(
            status_code=500,
            detail=get_safe_error_detail(e, context="Speech synthesis failed"),
        ) from None

    counter("api.speak.success")
    return Response(content=audio, media_type="audio/mpeg")
