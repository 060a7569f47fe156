"""Shared LLM call with retry logic.

Every analysis service sends its prompt through call_llm. Transient Vertex AI
failures are converted to builtin exception types and retried with
exponential backoff; anything else propagates to the caller, which decides
how to fail.
"""

from __future__ import annotations

from typing import Any

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from cardinal.config import LLM_MAX_RETRIES, LLM_TIMEOUT_SECONDS
from cardinal.infrastructure.settings import GEMINI_MAX_TOKENS, GEMINI_TEMPERATURE
from cardinal.llm.gemini import get_gemini_model_with_options
from cardinal.observability.logging import get_logger
from cardinal.observability.telemetry import counter, time_block

logger = get_logger(__name__)


@retry(
    stop=stop_after_attempt(LLM_MAX_RETRIES),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((TimeoutError, ConnectionError, OSError)),
    reraise=True,
)
def call_llm(
    contents: str | list[Any],
    counter_prefix: str = "llm",
    system_instruction: str | None = None,
    json_output: bool = False,
) -> str:
    """Call Gemini with retry and Vertex AI exception conversion.

    Args:
        contents: Prompt text, or a list of prompt text and image parts.
        counter_prefix: Telemetry counter prefix (e.g., "yard", "sales").
        system_instruction: Optional system instruction for the model.
        json_output: Ask the model for an application/json response.

    Returns:
        The model's response text.

    Raises:
        TimeoutError: On deadline exceeded (retryable).
        ConnectionError: On service unavailable or internal error (retryable).
        OSError: On resource exhausted / rate limited (retryable).
        Exception: On other errors (not retried, caller handles).
    """
    from google.api_core.exceptions import (
        DeadlineExceeded,
        InternalServerError,
        ResourceExhausted,
        ServiceUnavailable,
    )

    model = get_gemini_model_with_options(system_instruction=system_instruction)

    generation_config: dict[str, Any] = {
        "temperature": GEMINI_TEMPERATURE,
        "max_output_tokens": GEMINI_MAX_TOKENS,
    }
    if json_output:
        generation_config["response_mime_type"] = "application/json"

    try:
        with time_block(f"llm.{counter_prefix}.latency"):
            response = model.generate_content(contents, generation_config=generation_config)
        counter(f"llm.{counter_prefix}.success")
        return response.text
    except DeadlineExceeded as e:
        counter(f"llm.{counter_prefix}.timeout")
        logger.warning("LLM call timed out after %ds", LLM_TIMEOUT_SECONDS)
        raise TimeoutError(f"LLM call timed out: {e}") from e
    except ServiceUnavailable as e:
        counter(f"llm.{counter_prefix}.service_unavailable")
        logger.warning("LLM service unavailable, will retry: %s", e)
        raise ConnectionError(f"LLM service unavailable: {e}") from e
    except ResourceExhausted as e:
        counter(f"llm.{counter_prefix}.rate_limited")
        logger.warning("LLM rate limited (429), will retry: %s", e)
        raise OSError(f"LLM rate limited: {e}") from e
    except InternalServerError as e:
        counter(f"llm.{counter_prefix}.internal_error")
        logger.warning("LLM internal error (500), will retry: %s", e)
        raise ConnectionError(f"LLM internal error: {e}") from e
    except Exception as e:
        counter(f"llm.{counter_prefix}.error")
        logger.error("LLM call failed: %s", e)
        raise
