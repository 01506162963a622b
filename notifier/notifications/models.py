"""
models.py — Shared data structures for notification dispatch.

Defines:
    • ChannelKind   — built-in delivery channel identifiers
    • Sender        — the one capability every channel/decorator/group has
    • Subscriber    — an observer with a channel preference
    • Delivery      — record of one emitted line

═══════════════════════════════════════════════════════════════════════════
CHANNEL KINDS
═══════════════════════════════════════════════════════════════════════════

    Kind     Label                Output line
    ─────    ─────────────────    ─────────────────────────────────
    sms      SMS                  Sending SMS: <message>
    email    Email                Sending Email: <message>
    push     Push Notification    Sending Push Notification: <message>

ChannelKind covers the built-in kinds only. Registries key on the
normalised string form, so a new kind ("fax", "slack", ...) is added by
registering a factory for it, never by editing this enum.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Protocol, Union, runtime_checkable


# ═══════════════════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════════════════

class ChannelKind(str, Enum):
    """Built-in delivery channels."""
    SMS   = "sms"
    EMAIL = "email"
    PUSH  = "push"


KindLike = Union[ChannelKind, str]


def normalize_kind(kind: KindLike) -> str:
    """
    Map a kind given as enum member or free-form string to its registry key.

    ``ChannelKind.SMS``, ``"SMS"`` and ``" sms "`` all become ``"sms"``.
    """
    if isinstance(kind, ChannelKind):
        return kind.value
    return str(kind).strip().lower()


# ═══════════════════════════════════════════════════════════════════════════
# Capabilities
# ═══════════════════════════════════════════════════════════════════════════

@runtime_checkable
class Sender(Protocol):
    """Anything that can deliver a message: channel, decorator or group."""

    def send(self, message: str) -> Any:  # pragma: no cover - Protocol
        ...


@runtime_checkable
class Subscriber(Protocol):
    """An observer interested in messages for one channel kind."""

    name: str
    preference: str

    def update(self, message: str) -> Any:  # pragma: no cover - Protocol
        ...


# ═══════════════════════════════════════════════════════════════════════════
# Data Structures
# ═══════════════════════════════════════════════════════════════════════════

def _generate_id() -> str:
    return f"DLV-{uuid.uuid4().hex[:12].upper()}"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Delivery:
    """Record of one line emitted by a channel."""
    kind: str
    message: str
    line: str
    delivery_id: str = field(default_factory=_generate_id)
    sent_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "delivery_id": self.delivery_id,
            "kind": self.kind,
            "message": self.message,
            "line": self.line,
            "sent_at": self.sent_at.isoformat(),
        }
