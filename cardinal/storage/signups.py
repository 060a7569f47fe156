"""
In-memory signup log for the /email endpoint.

Entries live only as long as the process; nothing is written to disk.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime

from cardinal.observability.logging import get_logger
from cardinal.utils.redaction import redact_email
from cardinal.utils.validators import validate_email_address, validate_role

logger = get_logger(__name__)


@dataclass(frozen=True)
class SignupEntry:
    email: str
    role: str
    timestamp: datetime

    def to_dict(self) -> dict[str, str]:
        return {
            "email": self.email,
            "role": self.role,
            "timestamp": self.timestamp.isoformat(),
        }


class SignupLog:
    """Append-only list of signups, safe to share across request threads."""

    def __init__(self) -> None:
        self._entries: list[SignupEntry] = []
        self._lock = threading.Lock()

    def append(self, email: str, role: str | None = None) -> SignupEntry:
        """
        Validate and record a signup.

        Raises:
            ValidationError: If the email or role is malformed
        """
        entry = SignupEntry(
            email=validate_email_address(email),
            role=validate_role(role),
            timestamp=datetime.now(UTC),
        )
        with self._lock:
            self._entries.append(entry)
            total = len(self._entries)

        logger.info("Signup recorded: %s as %s (total=%d)", redact_email(entry.email), entry.role, total)
        return entry

    def entries(self) -> list[SignupEntry]:
        with self._lock:
            return list(self._entries)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_signup_log = SignupLog()


def get_signup_log() -> SignupLog:
    return _signup_log
