"""
Redaction helpers for logs and prompts.

Provides:
- redact(): Hash sensitive strings for correlation without exposure
- redact_email(): Keep the domain of an address, hash the mailbox
- sanitize_for_prompt(): Remove potential prompt injection patterns
"""

from __future__ import annotations

import re
from hashlib import sha256

# Patterns that could be used for prompt injection
INJECTION_PATTERNS = [
    r"ignore\s+(previous|above|all)\s+instructions?",
    r"disregard\s+(previous|above|all)\s+instructions?",
    r"forget\s+(previous|above|all)\s+instructions?",
    r"new\s+instructions?:",
    r"system\s*:",
    r"assistant\s*:",
    r"user\s*:",
    r"\[INST\]",
    r"\[/INST\]",
    r"<\|im_start\|>",
    r"<\|im_end\|>",
]
INJECTION_REGEX = re.compile("|".join(INJECTION_PATTERNS), re.IGNORECASE)


def redact(value: str | None) -> str:
    """
    Return a stable hash representation of a sensitive string.
    """
    if not value:
        return "hash:missing"
    digest = sha256(value.encode("utf-8")).hexdigest()[:12]
    return f"hash:{digest}"


def redact_email(email: str | None) -> str:
    """
    Redact the mailbox part of an address for logging.

    Example:
        "pat@example.com" -> "hash:1a2b3c@example.com"
    """
    if not email or "@" not in email:
        return redact(email)
    local, _, domain = email.rpartition("@")
    digest = sha256(local.encode("utf-8")).hexdigest()[:6]
    return f"hash:{digest}@{domain}"


def sanitize_for_prompt(text: str | None, max_length: int = 500) -> str:
    """
    Sanitize user-provided text before including in LLM prompts.

    Mitigates prompt injection by:
    1. Removing known injection patterns
    2. Truncating to reasonable length
    3. Stripping characters that break str.format templates

    Args:
        text: User-provided text (yard description, job notes, names)
        max_length: Maximum allowed length

    Returns:
        Sanitized text safe for prompt inclusion
    """
    if not text:
        return ""

    # Truncate first to limit processing
    text = text[:max_length]

    text = INJECTION_REGEX.sub("[REDACTED]", text)

    # Braces would be read as template fields by str.format
    text = re.sub(r"[<>{}|\\]", "", text)

    return text.strip()
