"""
Text-to-speech passthrough.

/speak is served by OpenAI's speech model, which returns MP3 directly.
"""

from __future__ import annotations

from functools import lru_cache

from openai import APIConnectionError, APITimeoutError, OpenAI, RateLimitError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cardinal.config import LLM_MAX_RETRIES, LLM_TIMEOUT_SECONDS, SPEECH_MAX_CHARS
from cardinal.infrastructure.settings import OPENAI_API_KEY, TTS_MODEL, TTS_VOICE, TTS_VOICES
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, time_block

logger = get_logger(__name__)


class SpeechConfigurationError(RuntimeError):
    """Raised when the speech client cannot be created."""


@lru_cache(maxsize=1)
def get_speech_client() -> OpenAI:
    if not OPENAI_API_KEY:
        raise SpeechConfigurationError("OPENAI_API_KEY is not set")
    logger.info("Initialized speech client: model=%s", TTS_MODEL)
    return OpenAI(api_key=OPENAI_API_KEY, timeout=LLM_TIMEOUT_SECONDS, max_retries=0)


def resolve_voice(voice: str | None) -> str:
    """Return a supported voice name, falling back to the configured default."""
    if voice and voice.lower() in TTS_VOICES:
        return voice.lower()
    return TTS_VOICE


@retry(
    stop=stop_after_attempt(LLM_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((APITimeoutError, APIConnectionError, RateLimitError)),
    reraise=True,
)
def synthesize_speech(text: str, voice: str | None = None) -> bytes:
    """
    Convert text to MP3 audio.

    Side Effects:
        - Calls the OpenAI speech API
        - Increments telemetry counters
    """
    client = get_speech_client()
    voice_name = resolve_voice(voice)

    with time_block("speech.synthesize.latency"):
        response = client.audio.speech.create(
            model=TTS_MODEL,
            voice=voice_name,
            input=text[:SPEECH_MAX_CHARS],
            response_format="mp3",
        )

    audio = response.content
    counter("speech.synthesize.success")
    logger.info("Synthesized %d bytes of audio (voice=%s)", len(audio), voice_name)
    return audio
