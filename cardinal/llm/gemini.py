"""
Gemini Model Manager - shared model instance for text and vision calls.

Supports two backends:
  1. Vertex AI SDK (production) - uses GOOGLE_CLOUD_PROJECT + service account
  2. google-generativeai (local dev) - uses GOOGLE_API_KEY
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any

from cardinal.infrastructure.settings import (
    GEMINI_LOCATION,
    GEMINI_MODEL,
    GOOGLE_API_KEY,
    GOOGLE_CLOUD_PROJECT,
)
from cardinal.observability.logging import get_logger

logger = get_logger(__name__)

# Track which backend is available so the helpers below can reuse it
_backend: str | None = None  # "vertexai" or "genai"


class GeminiInitializationError(RuntimeError):
    """Raised when Gemini model cannot be initialized."""


@lru_cache(maxsize=1)
def get_gemini_model():
    """
    Get or create shared Gemini model instance (no system instruction).

    Tries Vertex AI SDK first (production). Falls back to google-generativeai
    with GOOGLE_API_KEY for local development.

    Returns:
        GenerativeModel: Shared Gemini model

    Raises:
        GeminiInitializationError: If model cannot be initialized
    """
    global _backend

    try:
        import vertexai
        from vertexai.generative_models import GenerativeModel

        project = GOOGLE_CLOUD_PROJECT or os.getenv("GOOGLE_CLOUD_PROJECT")
        location = GEMINI_LOCATION or "us-central1"

        if project:
            vertexai.init(project=project, location=location)
            model = GenerativeModel(GEMINI_MODEL)
            _backend = "vertexai"

            logger.info(
                "Initialized Gemini model (Vertex AI): project=%s, location=%s, model=%s",
                project,
                location,
                GEMINI_MODEL,
            )
            return model

        logger.info("GOOGLE_CLOUD_PROJECT not set, trying google-generativeai fallback")

    except ImportError:
        logger.info("Vertex AI SDK not installed, trying google-generativeai fallback")

    # Fallback: google-generativeai with API key (local dev)
    try:
        import google.generativeai as genai

        api_key = GOOGLE_API_KEY or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise GeminiInitializationError(
                "Neither GOOGLE_CLOUD_PROJECT nor GOOGLE_API_KEY is set."
            )

        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(GEMINI_MODEL)
        _backend = "genai"

        logger.info("Initialized Gemini model (google-generativeai): model=%s", GEMINI_MODEL)

        return model

    except ImportError as e:
        raise GeminiInitializationError(
            "No Gemini SDK available. Install google-cloud-aiplatform or google-generativeai."
        ) from e
    except GeminiInitializationError:
        raise
    except Exception as e:
        logger.error("Failed to initialize Gemini model: %s", e)
        raise GeminiInitializationError(f"Failed to initialize Gemini: {e}") from e


def get_gemini_model_with_options(system_instruction: str | None = None) -> Any:
    """Create a Gemini model instance with optional system instruction.

    System instructions are per-model-instance in the Gemini API, so when a
    system instruction is provided we create a fresh GenerativeModel. When
    no system instruction is needed, falls back to the cached singleton.
    """
    if system_instruction is None:
        return get_gemini_model()

    # Ensure the default model has been initialized (sets _backend)
    get_gemini_model()

    if _backend == "vertexai":
        from vertexai.generative_models import GenerativeModel

        return GenerativeModel(GEMINI_MODEL, system_instruction=system_instruction)

    import google.generativeai as genai

    return genai.GenerativeModel(GEMINI_MODEL, system_instruction=system_instruction)


def make_image_part(data: bytes, mime_type: str) -> Any:
    """Wrap raw image bytes in the content-part type of the active backend."""
    get_gemini_model()

    if _backend == "vertexai":
        from vertexai.generative_models import Part

        return Part.from_data(data=data, mime_type=mime_type)

    # google-generativeai accepts inline blobs as plain dicts
    return {"mime_type": mime_type, "data": data}


def clear_model_cache() -> None:
    """
    Clear the cached model instance.

    Useful for testing or when reconfiguration is needed.
    """
    global _backend
    get_gemini_model.cache_clear()
    _backend = None
    logger.info("Cleared Gemini model cache")
