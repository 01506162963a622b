"""
registry.py — Channel kind → factory mapping.

Callers never construct channels directly; they ask the registry for a
kind and get a fresh channel back. New kinds are added with
``register()``, so nothing else has to change when a channel appears:

    registry = build_default_registry()
    registry.register("fax", lambda: FaxChannel())
    registry.resolve("FAX").send("hello")

Lookups are case-insensitive (see ``normalize_kind``). There is no
catch-all: an unknown kind raises ``UnknownChannelKind``.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, TextIO

from notifier.core.errors import ChannelRegistrationError, UnknownChannelKind
from notifier.notifications.channels import EmailChannel, PushChannel, SmsChannel
from notifier.notifications.models import ChannelKind, KindLike, Sender, normalize_kind

logger = logging.getLogger(__name__)

ChannelFactory = Callable[[], Sender]


class ChannelRegistry:
    """Maps normalised channel kinds to zero-argument channel factories."""

    def __init__(self) -> None:
        self._factories: Dict[str, ChannelFactory] = {}

    def register(self, kind: KindLike, factory: ChannelFactory) -> None:
        """Add or replace the factory for ``kind``."""
        key = normalize_kind(kind) if isinstance(kind, str) else ""
        if not key:
            raise ChannelRegistrationError(kind, "kind must be a non-empty string")
        if not callable(factory):
            raise ChannelRegistrationError(kind, "factory must be callable")

        replaced = key in self._factories
        self._factories[key] = factory
        logger.debug(
            "%s channel factory for %r", "Replaced" if replaced else "Registered", key,
        )

    def unregister(self, kind: KindLike) -> bool:
        """Remove ``kind``. Returns False if it was not registered."""
        return self._factories.pop(normalize_kind(kind), None) is not None

    def resolve(self, kind: KindLike) -> Sender:
        """
        Build a channel for ``kind``.

        Raises
        ------
        UnknownChannelKind
            If no factory is registered for the kind.
        """
        key = normalize_kind(kind)
        factory = self._factories.get(key)
        if factory is None:
            raise UnknownChannelKind(key, registered=self._factories)
        return factory()

    def is_registered(self, kind: KindLike) -> bool:
        return normalize_kind(kind) in self._factories

    def kinds(self) -> List[str]:
        return sorted(self._factories)

    def __contains__(self, kind: object) -> bool:
        return isinstance(kind, str) and self.is_registered(kind)

    def __len__(self) -> int:
        return len(self._factories)


def build_default_registry(out: Optional[TextIO] = None) -> ChannelRegistry:
    """Registry with the built-in SMS, Email and Push channels."""
    registry = ChannelRegistry()
    registry.register(ChannelKind.SMS, lambda: SmsChannel(out))
    registry.register(ChannelKind.EMAIL, lambda: EmailChannel(out))
    registry.register(ChannelKind.PUSH, lambda: PushChannel(out))
    return registry
