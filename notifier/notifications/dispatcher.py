"""
dispatcher.py — Client-facing entry point for sending notifications.

    caller
      │  dispatch("sms", "hello")
      ▼
    NotificationDispatcher
      │  registry.resolve("sms")       → SmsChannel (fresh instance)
      │  decorate(channel, *wrappers)  → optional log / db chain
      ▼
    sender.send("hello")               → "Sending SMS: hello"

There is no process-wide dispatcher. ``build_dispatcher()`` is the
composition root: it builds one from settings, and callers pass that
instance to whatever needs it.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Optional, Sequence, TextIO

from notifier.core.config import Settings, get_settings
from notifier.core.logging_config import dispatch_context
from notifier.notifications.decorators import (
    DecoratorFactory,
    DeliveryStore,
    LoggingDecorator,
    PersistenceDecorator,
    decorate,
)
from notifier.notifications.models import KindLike, Sender, normalize_kind
from notifier.notifications.registry import ChannelRegistry, build_default_registry

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Resolve a channel by kind and send through the configured wrappers.

    Parameters
    ----------
    registry : ChannelRegistry
    wrappers : sequence of decorator factories
        Applied to every resolved or injected sender; first is outermost.
    """

    def __init__(
        self,
        registry: ChannelRegistry,
        wrappers: Sequence[DecoratorFactory] = (),
    ) -> None:
        self.registry = registry
        self.wrappers = tuple(wrappers)

    def sender_for(self, kind: KindLike) -> Sender:
        """Resolved channel wrapped in the configured decorators."""
        return decorate(self.registry.resolve(kind), *self.wrappers)

    def dispatch(self, kind: KindLike, message: str) -> Any:
        """
        Send ``message`` via the channel registered for ``kind``.

        Raises
        ------
        UnknownChannelKind
            If ``kind`` is not registered.
        """
        key = normalize_kind(kind)
        with dispatch_context(kind=key):
            sender = self.sender_for(key)
            logger.debug("Dispatching via %r", sender)
            return sender.send(message)

    def send_with(self, sender: Sender, message: str) -> Any:
        """Send through an injected sender, still applying the wrappers."""
        return decorate(sender, *self.wrappers).send(message)


def build_dispatcher(
    settings: Optional[Settings] = None,
    *,
    registry: Optional[ChannelRegistry] = None,
    out: Optional[TextIO] = None,
    store: Optional[DeliveryStore] = None,
) -> NotificationDispatcher:
    """
    Composition root for a dispatcher.

    Decorators are chosen from settings: logging (outer) then persistence
    (inner). A persistence decorator writes to ``store``, which is
    created if not given.
    """
    settings = settings or get_settings()
    registry = registry or build_default_registry(out)

    wrappers = []
    if settings.ENABLE_LOGGING_DECORATOR:
        wrappers.append(partial(LoggingDecorator, out=out))
    if settings.ENABLE_PERSISTENCE_DECORATOR:
        store = store if store is not None else DeliveryStore()
        wrappers.append(partial(PersistenceDecorator, store=store, out=out))

    logger.debug(
        "Built dispatcher: kinds=%s decorators=%d", registry.kinds(), len(wrappers),
    )
    return NotificationDispatcher(registry, wrappers)
