"""
Client-safe error messages.

Pricing and signup errors are short enough to show as-is. Anything that looks
like a path, traceback, credential or SDK internals is swapped for generic
text, and every 5xx gets a fixed message. The full error is always logged.
"""

from __future__ import annotations

import re

from cardinal.observability.logging import get_logger

logger = get_logger(__name__)

CLIENT_ERROR_MESSAGE = "Invalid request. Please check your input and try again."
SERVER_ERROR_MESSAGE = "An internal error occurred. Please try again later."

MAX_CLIENT_MESSAGE_LENGTH = 160

_LEAKY = re.compile(
    "|".join(
        [
            r"Traceback \(most recent call last\)",
            r"File \"[^\"]+\"",
            r"/[^\s]+\.py",
            r"sk-[A-Za-z0-9_-]+",
            r"AIza[0-9A-Za-z_-]+",
            r"[A-Za-z0-9_-]{32,}",
            r"cardinal\.[a-z_.]+",
            r"google\.api_core|vertexai|openai\.",
        ]
    ),
    re.IGNORECASE,
)


def sanitize_error_message(message: str, status_code: int = 400) -> str:
    """Return message if it is safe to show the client, else generic text."""
    if status_code >= 500:
        return SERVER_ERROR_MESSAGE
    if not message or len(message) > MAX_CLIENT_MESSAGE_LENGTH or "\n" in message:
        return CLIENT_ERROR_MESSAGE
    if _LEAKY.search(message):
        logger.warning("Replaced client error message that exposed internals")
        return CLIENT_ERROR_MESSAGE
    return message


def get_safe_error_detail(error: Exception, context: str) -> str:
    """Log a failed service call and return the context text for the 500 body."""
    logger.error("%s: %s - %s", context, type(error).__name__, error)
    return context
