"""
decorators.py — Cross-cutting wrappers around a sender.

Each decorator wraps exactly one inner sender and exposes the same
``send(message)``. A send runs the decorator's pre-step, delegates, then
runs its post-step, so nested decorators follow stack discipline:

    decorate(channel, LoggingDecorator, PersistenceDecorator)

        [log] before: hi          ← outermost pre
        [db] saving: hi
        Sending SMS: hi           ← channel
        [db] saved: hi
        [log] after: hi           ← outermost post

Failures raised by the inner sender propagate unchanged; the post-step of
every enclosing decorator is skipped. A non-str message is rejected before
any pre-step runs.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, TextIO

from notifier.core.errors import InvalidMessageError
from notifier.notifications.models import Delivery, Sender, normalize_kind

logger = logging.getLogger(__name__)

DecoratorFactory = Callable[[Sender], "SenderDecorator"]


# ═══════════════════════════════════════════════════════════════════════════
# Delivery Store
# ═══════════════════════════════════════════════════════════════════════════

class DeliveryStore:
    """In-memory, insertion-ordered record of persisted deliveries."""

    def __init__(self) -> None:
        self._deliveries: List[Delivery] = []

    def save(self, delivery: Delivery) -> None:
        self._deliveries.append(delivery)

    def all(self) -> List[Delivery]:
        return list(self._deliveries)

    def by_kind(self, kind: str) -> List[Delivery]:
        key = normalize_kind(kind)
        return [d for d in self._deliveries if d.kind == key]

    def clear(self) -> None:
        self._deliveries.clear()

    def __len__(self) -> int:
        return len(self._deliveries)


# ═══════════════════════════════════════════════════════════════════════════
# Decorators
# ═══════════════════════════════════════════════════════════════════════════

class SenderDecorator:
    """
    Base wrapper. Subclasses override ``before`` and ``after``.

    Parameters
    ----------
    inner : Sender
        The wrapped channel or decorator.
    out : TextIO | None
        Stream for the decorator's own lines (``None`` → current stdout).
    """

    label = "decorator"

    def __init__(self, inner: Sender, out: Optional[TextIO] = None) -> None:
        if not callable(getattr(inner, "send", None)):
            raise TypeError(
                f"{type(self).__name__} must wrap a sender, got {type(inner).__name__}"
            )
        self.inner = inner
        self._out = out

    def send(self, message: str) -> Any:
        if not isinstance(message, str):
            raise InvalidMessageError(message)
        self.before(message)
        result = self.inner.send(message)
        self.after(message, result)
        return result

    def before(self, message: str) -> None:
        pass

    def after(self, message: str, result: Any) -> None:
        pass

    def innermost(self) -> Sender:
        """The concrete sender at the end of the chain."""
        node: Sender = self
        while isinstance(node, SenderDecorator):
            node = node.inner
        return node

    def _write(self, text: str) -> None:
        print(f"[{self.label}] {text}", file=self._out)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r})"


class LoggingDecorator(SenderDecorator):
    """Announces each send before and after it happens."""

    label = "log"

    def __init__(
        self,
        inner: Sender,
        out: Optional[TextIO] = None,
        logger_: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(inner, out)
        self._logger = logger_ or logger

    def before(self, message: str) -> None:
        self._write(f"before: {message}")
        self._logger.info(
            "Sending via %r", self.innermost(), extra={"decorator": self.label},
        )

    def after(self, message: str, result: Any) -> None:
        self._write(f"after: {message}")
        self._logger.info(
            "Sent via %r", self.innermost(), extra={"decorator": self.label},
        )


class PersistenceDecorator(SenderDecorator):
    """Saves every delivery produced by the inner sender to a store."""

    label = "db"

    def __init__(
        self,
        inner: Sender,
        store: Optional[DeliveryStore] = None,
        out: Optional[TextIO] = None,
    ) -> None:
        super().__init__(inner, out)
        self.store = store if store is not None else DeliveryStore()

    def before(self, message: str) -> None:
        self._write(f"saving: {message}")

    def after(self, message: str, result: Any) -> None:
        for delivery in _as_deliveries(result):
            self.store.save(delivery)
        self._write(f"saved: {message}")
        logger.debug(
            "Persisted delivery (%d stored)", len(self.store),
            extra={"decorator": self.label},
        )


def _as_deliveries(result: Any) -> List[Delivery]:
    if isinstance(result, Delivery):
        return [result]
    if isinstance(result, list):
        return [d for d in result if isinstance(d, Delivery)]
    return []


# ═══════════════════════════════════════════════════════════════════════════
# Chain Builder
# ═══════════════════════════════════════════════════════════════════════════

def decorate(sender: Sender, *wrappers: DecoratorFactory) -> Sender:
    """
    Wrap ``sender`` in ``wrappers``; the first wrapper listed is outermost.

    Each wrapper is a callable taking the inner sender, usually a decorator
    class or a ``functools.partial`` of one.
    """
    result = sender
    for wrap in reversed(wrappers):
        result = wrap(result)
    return result


def describe_chain(sender: Sender) -> List[str]:
    """Labels from outermost decorator to the concrete sender's class name."""
    labels: List[str] = []
    node: Any = sender
    while isinstance(node, SenderDecorator):
        labels.append(node.label)
        node = node.inner
    labels.append(type(node).__name__)
    return labels


def summarize_store(store: DeliveryStore) -> Dict[str, int]:
    """Count of stored deliveries per kind."""
    counts: Dict[str, int] = {}
    for delivery in store.all():
        counts[delivery.kind] = counts.get(delivery.kind, 0) + 1
    return counts
