"""
commands.py — Deferred sends.

A ``SendCommand`` packages a sender and a message; a ``CommandInvoker``
queues commands and runs them in submission order.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, List

from notifier.notifications.models import Sender

logger = logging.getLogger(__name__)


class SendCommand:
    """One send, ready to execute."""

    def __init__(self, sender: Sender, message: str) -> None:
        self.sender = sender
        self.message = message
        self.executed = False

    def execute(self) -> Any:
        result = self.sender.send(self.message)
        self.executed = True
        return result

    def __repr__(self) -> str:
        return f"SendCommand({self.sender!r}, {self.message!r})"


class CommandInvoker:
    """
    FIFO queue of commands.

    ``run()`` stops at the first failing command and re-raises; that
    command and everything after it stay queued.
    """

    def __init__(self) -> None:
        self._queue: Deque[SendCommand] = deque()
        self.history: List[SendCommand] = []

    def submit(self, command: SendCommand) -> None:
        self._queue.append(command)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run(self) -> List[Any]:
        results: List[Any] = []
        while self._queue:
            command = self._queue[0]
            results.append(command.execute())
            self._queue.popleft()
            self.history.append(command)

        logger.debug("Executed %d queued commands", len(results))
        return results
