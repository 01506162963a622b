"""
subscriptions.py — Observer-style fan-out by channel preference.

Subscribers declare one preferred kind. ``notify(message, kind)`` calls
``update(message)`` on every subscriber whose preference matches, in the
order they subscribed. Registration has set semantics keyed on identity:
subscribing the same object twice still delivers once.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from notifier.notifications.models import KindLike, Sender, Subscriber, normalize_kind

logger = logging.getLogger(__name__)


class ChannelSubscriber:
    """
    Subscriber that forwards updates through its own sender.

    Each update is sent as ``"<name>: <message>"`` and the raw message is
    kept in ``received``.
    """

    def __init__(self, name: str, preference: KindLike, sender: Sender) -> None:
        self.name = name
        self.preference = normalize_kind(preference)
        self.sender = sender
        self.received: List[str] = []

    def update(self, message: str):
        self.received.append(message)
        return self.sender.send(f"{self.name}: {message}")

    def __repr__(self) -> str:
        return f"ChannelSubscriber({self.name!r}, preference={self.preference!r})"


class SubscriptionRegistry:
    """Ordered set of subscribers with preference-filtered notify."""

    def __init__(self) -> None:
        # id() → subscriber; dict preserves registration order
        self._subscribers: Dict[int, Subscriber] = {}

    def subscribe(self, subscriber: Subscriber) -> bool:
        """Register ``subscriber``. Returns False if it was already registered."""
        key = id(subscriber)
        if key in self._subscribers:
            logger.debug("%r already subscribed", subscriber)
            return False
        self._subscribers[key] = subscriber
        logger.debug(
            "Subscribed %r", subscriber,
            extra={"subscriber": getattr(subscriber, "name", None)},
        )
        return True

    def unsubscribe(self, subscriber: Subscriber) -> bool:
        """Remove ``subscriber``. Returns False if it was not registered."""
        return self._subscribers.pop(id(subscriber), None) is not None

    def subscribers(self, kind: Optional[KindLike] = None) -> List[Subscriber]:
        if kind is None:
            return list(self._subscribers.values())
        key = normalize_kind(kind)
        return [
            s for s in self._subscribers.values()
            if normalize_kind(s.preference) == key
        ]

    def notify(self, message: str, kind: KindLike) -> int:
        """
        Deliver ``message`` to every subscriber preferring ``kind``.

        Returns the number of subscribers notified; zero is not an error.
        """
        targets = self.subscribers(kind)
        for subscriber in targets:
            subscriber.update(message)

        logger.info(
            "Notified %d/%d subscribers for %s",
            len(targets), len(self._subscribers), normalize_kind(kind),
            extra={"kind": normalize_kind(kind)},
        )
        return len(targets)

    def __contains__(self, subscriber: object) -> bool:
        return id(subscriber) in self._subscribers

    def __len__(self) -> int:
        return len(self._subscribers)
