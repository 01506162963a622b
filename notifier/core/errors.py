"""
Centralised error handling — exception hierarchy.

Provides:
    • Domain-specific exception classes
    • A consistent dict shape for reporting errors (``to_dict``)

Usage:
    from notifier.core.errors import UnknownChannelKind

    raise UnknownChannelKind("fax", registered=["email", "push", "sms"])
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


# ═══════════════════════════════════════════════════════════════════════════
# Exception Hierarchy
# ═══════════════════════════════════════════════════════════════════════════

class NotifierError(Exception):
    """Base exception for all notifier errors."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            body["details"] = self.details
        return {"error": body}


class UnknownChannelKind(NotifierError):
    """No factory is registered for the requested channel kind."""

    def __init__(self, kind: str, registered: Iterable[str] = ()):
        registered = sorted(registered)
        super().__init__(
            message=f"Unknown channel kind: {kind!r}",
            error_code="UNKNOWN_CHANNEL_KIND",
            details={"kind": kind, "registered": registered},
        )
        self.kind = kind
        self.registered = registered


class ChannelRegistrationError(NotifierError):
    """A channel factory could not be registered."""

    def __init__(self, kind: Any, message: str):
        super().__init__(
            message=f"Cannot register channel {kind!r}: {message}",
            error_code="CHANNEL_REGISTRATION_ERROR",
            details={"kind": kind},
        )


class InvalidMessageError(NotifierError):
    """Message payload is not a string."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Message must be a str, got {type(value).__name__}",
            error_code="INVALID_MESSAGE",
            details={"type": type(value).__name__},
        )


class UnhandledNotification(NotifierError):
    """No handler in a routing chain accepted the message."""

    def __init__(self, message_text: str, hour: int):
        super().__init__(
            message=f"No handler accepted the message at hour {hour}",
            error_code="UNHANDLED_NOTIFICATION",
            details={"hour": hour, "message": message_text},
        )
        self.hour = hour
