"""
Input validation utilities for signup and request fields.
"""

from __future__ import annotations

import re

# Pragmatic address check: one @, a dotted domain, no whitespace
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$")
MAX_EMAIL_LENGTH = 254  # RFC 5321 path limit

ROLE_PATTERN = re.compile(r"^[a-z][a-z0-9_\- ]*$")
MAX_ROLE_LENGTH = 40
DEFAULT_ROLE = "homeowner"


class ValidationError(ValueError):
    """Raised when input validation fails."""

    pass


def validate_email_address(email: str | None) -> str:
    """
    Validate and normalize an email address.

    Args:
        email: The address to validate

    Returns:
        The address, stripped, with the domain lowercased

    Raises:
        ValidationError: If the address is missing or malformed
    """
    if email is None:
        raise ValidationError("Email is required")

    email = email.strip()
    if not email:
        raise ValidationError("Email is required")

    if len(email) > MAX_EMAIL_LENGTH:
        raise ValidationError(f"Email exceeds maximum length of {MAX_EMAIL_LENGTH}")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")

    local, _, domain = email.rpartition("@")
    return f"{local}@{domain.lower()}"


def validate_role(role: str | None) -> str:
    """
    Validate a signup role such as "homeowner" or "crew lead".

    Returns:
        The lowercased role, or DEFAULT_ROLE when none was given

    Raises:
        ValidationError: If the role is too long or has odd characters
    """
    if role is None:
        return DEFAULT_ROLE

    role = role.strip().lower()
    if not role:
        return DEFAULT_ROLE

    if len(role) > MAX_ROLE_LENGTH:
        raise ValidationError(f"Role exceeds maximum length of {MAX_ROLE_LENGTH}")

    if not ROLE_PATTERN.match(role):
        raise ValidationError(
            "Invalid role format. Use letters, numbers, spaces, hyphens and underscores."
        )

    return role
