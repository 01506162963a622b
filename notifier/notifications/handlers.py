"""
handlers.py — Time-of-day routing as a chain of handlers.

Each handler owns one predicate and at most one successor. The first
handler whose predicate holds sends the message and the walk stops:

    email (09–17) ──▶ sms (17–22) ──▶ push (22–09) ──▶ end of chain

═══════════════════════════════════════════════════════════════════════════
UNMATCHED MESSAGES
═══════════════════════════════════════════════════════════════════════════

When no handler accepts the message, the chain's ``UnmatchedPolicy``
decides what happens:

    Policy    Behaviour
    ──────    ──────────────────────────────────────────────
    drop      return None, nothing logged
    log       return None, WARNING record (default)
    raise     UnhandledNotification

Windows are half-open ``[start, end)`` hours. ``start > end`` wraps past
midnight. Overlaps are not rejected; the first handler in the chain wins.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional

from notifier.core.config import DeliveryWindow
from notifier.core.errors import UnhandledNotification
from notifier.notifications.models import Sender
from notifier.notifications.registry import ChannelRegistry

logger = logging.getLogger(__name__)


class UnmatchedPolicy(str, Enum):
    DROP  = "drop"
    LOG   = "log"
    RAISE = "raise"


def _hour_of(at: Optional[datetime]) -> int:
    return (at or datetime.now()).hour


class Handler(ABC):
    """Base link in the chain. Subclasses implement ``can_handle``."""

    def __init__(
        self,
        sender: Sender,
        policy: UnmatchedPolicy = UnmatchedPolicy.LOG,
    ) -> None:
        self.sender = sender
        self.policy = UnmatchedPolicy(policy)
        self._next: Optional[Handler] = None

    @property
    def successor(self) -> Optional["Handler"]:
        return self._next

    def set_next(self, handler: "Handler") -> "Handler":
        """Attach ``handler`` as successor and return it for fluent chaining."""
        self._next = handler
        return handler

    @abstractmethod
    def can_handle(self, message: str, hour: int) -> bool:
        """True if this link should send ``message`` at ``hour``."""

    def handle(self, message: str, at: Optional[datetime] = None) -> Any:
        hour = _hour_of(at)
        node: Optional[Handler] = self
        while node is not None:
            if node.can_handle(message, hour):
                logger.debug("%r accepted message at hour %d", node, hour)
                return node.sender.send(message)
            node = node._next
        return self._unmatched(message, hour)

    def _unmatched(self, message: str, hour: int) -> None:
        if self.policy is UnmatchedPolicy.RAISE:
            raise UnhandledNotification(message, hour)
        if self.policy is UnmatchedPolicy.LOG:
            logger.warning(
                "No handler accepted message at hour %d; dropped: %r", hour, message,
            )
        return None


class TimeWindowHandler(Handler):
    """Accepts messages whose hour falls in ``[start_hour, end_hour)``."""

    def __init__(
        self,
        start_hour: int,
        end_hour: int,
        sender: Sender,
        policy: UnmatchedPolicy = UnmatchedPolicy.LOG,
    ) -> None:
        if not (0 <= start_hour <= 23 and 0 <= end_hour <= 24) or start_hour == end_hour:
            raise ValueError(f"invalid window {start_hour}-{end_hour}")
        super().__init__(sender, policy)
        self.start_hour = start_hour
        self.end_hour = end_hour

    def can_handle(self, message: str, hour: int) -> bool:
        if self.start_hour < self.end_hour:
            return self.start_hour <= hour < self.end_hour
        # wraps midnight
        return hour >= self.start_hour or hour < self.end_hour

    def __repr__(self) -> str:
        return f"TimeWindowHandler({self.start_hour:02d}-{self.end_hour:02d}, {self.sender!r})"


def build_time_window_chain(
    registry: ChannelRegistry,
    windows: Iterable[DeliveryWindow],
    policy: UnmatchedPolicy = UnmatchedPolicy.LOG,
) -> Handler:
    """
    Build a chain from configured windows, in the order given.

    The policy is set on the head handler, which is the one applying it.
    Raises ``UnknownChannelKind`` if a window names an unregistered kind.
    """
    handlers: List[Handler] = [
        TimeWindowHandler(w.start_hour, w.end_hour, registry.resolve(w.channel), policy)
        for w in windows
    ]
    if not handlers:
        raise ValueError("at least one delivery window is required")

    for current, following in zip(handlers, handlers[1:]):
        current.set_next(following)
    return handlers[0]
