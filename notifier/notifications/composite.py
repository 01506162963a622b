"""
composite.py — A named group of senders treated as one sender.

Groups may contain channels, decorated channels or other groups. Sending
to a group sends to every child in insertion order and returns a flat
list of deliveries. A failing child stops the fan-out and propagates.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List

from notifier.notifications.models import Sender

logger = logging.getLogger(__name__)


class ChannelGroup:

    def __init__(self, name: str, children: Iterable[Sender] = ()) -> None:
        self.name = name
        self._children: List[Sender] = []
        for child in children:
            self.add(child)

    def add(self, child: Sender) -> None:
        if child is self or (isinstance(child, ChannelGroup) and child.contains(self)):
            raise ValueError(f"adding {child!r} to {self.name!r} would create a cycle")
        self._children.append(child)

    def contains(self, sender: Sender) -> bool:
        """True if ``sender`` is a child of this group or of any nested group."""
        for child in self._children:
            if child is sender:
                return True
            if isinstance(child, ChannelGroup) and child.contains(sender):
                return True
        return False

    def remove(self, child: Sender) -> bool:
        for i, existing in enumerate(self._children):
            if existing is child:
                del self._children[i]
                return True
        return False

    @property
    def children(self) -> List[Sender]:
        return list(self._children)

    def send(self, message: str) -> List[Any]:
        deliveries: List[Any] = []
        for child in self._children:
            result = child.send(message)
            if isinstance(result, list):
                deliveries.extend(result)
            elif result is not None:
                deliveries.append(result)

        logger.debug(
            "Group %r sent to %d children", self.name, len(self._children),
            extra={"group": self.name},
        )
        return deliveries

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"ChannelGroup({self.name!r}, {len(self._children)} children)"
