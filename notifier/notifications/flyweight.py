"""
flyweight.py — Shared notification instances keyed by message text.

A ``NotificationPool`` is bound to one channel. Asking it for the same
message text twice returns the same ``SharedNotification`` object; the
key is exact string equality (``"Hi"`` and ``"hi"`` are different).
Entries live until ``clear()``, so the guarantee holds for the life of
the pool.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from notifier.core.errors import InvalidMessageError
from notifier.notifications.models import Sender

logger = logging.getLogger(__name__)


class SharedNotification:
    """Immutable message bound to the pool's channel."""

    __slots__ = ("_message", "_sender")

    def __init__(self, message: str, sender: Sender) -> None:
        self._message = message
        self._sender = sender

    @property
    def message(self) -> str:
        return self._message

    def send(self) -> Any:
        return self._sender.send(self._message)

    def __repr__(self) -> str:
        return f"SharedNotification({self._message!r})"


class NotificationPool:
    """
    Flyweight factory.

    Parameters
    ----------
    sender : Sender
        Channel (or decorated channel) every shared notification sends through.
    """

    def __init__(self, sender: Sender) -> None:
        self._sender = sender
        self._shared: Dict[str, SharedNotification] = {}
        self.hits = 0

    def get_shared(self, message: str) -> SharedNotification:
        if not isinstance(message, str):
            raise InvalidMessageError(message)

        shared = self._shared.get(message)
        if shared is not None:
            self.hits += 1
            return shared

        shared = SharedNotification(message, self._sender)
        self._shared[message] = shared
        logger.debug("Pooled shared notification (%d cached)", len(self._shared))
        return shared

    def clear(self) -> None:
        self._shared.clear()
        self.hits = 0

    def __contains__(self, message: object) -> bool:
        return message in self._shared

    def __len__(self) -> int:
        return len(self._shared)
