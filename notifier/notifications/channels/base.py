"""
base.py — Shared send pipeline for all concrete channels.

Every channel runs the same fixed sequence; subclasses only supply their
identity and, where the wording differs, the line format:

    send(message)
      │
      ├── validate(message)       reject non-str payloads
      ├── format_line(message)    hook: "Sending <label>: <message>",
      │                           line breaks folded to spaces
      ├── emit(line)              write one line to the output stream
      └── Delivery(...)           returned to the caller
"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional, TextIO

from notifier.core.errors import InvalidMessageError
from notifier.notifications.models import Delivery

logger = logging.getLogger(__name__)


class TemplateChannel:
    """
    Base class for concrete channels.

    Parameters
    ----------
    out : TextIO | None
        Stream receiving the output lines. ``None`` means the current
        ``sys.stdout`` at send time.
    """

    kind: ClassVar[str] = ""
    label: ClassVar[str] = ""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out

    def send(self, message: str) -> Delivery:
        self.validate(message)
        line = self.format_line(message)
        self.emit(line)
        delivery = Delivery(kind=self.kind, message=message, line=line)
        logger.debug(
            "[%s] delivered %s (%d chars)",
            self.kind.upper(), delivery.delivery_id, len(message),
            extra={"kind": self.kind, "delivery_id": delivery.delivery_id},
        )
        return delivery

    def validate(self, message: str) -> None:
        if not isinstance(message, str):
            raise InvalidMessageError(message)

    def format_line(self, message: str) -> str:
        body = " ".join(message.splitlines())
        return f"Sending {self.label}: {body}"

    def emit(self, line: str) -> None:
        print(line, file=self._out)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
