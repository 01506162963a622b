"""
facade.py — One-call helpers over a dispatcher.

Callers that only want "send an SMS" never see registries or decorators.
"""

from __future__ import annotations

from typing import Any, List

from notifier.notifications.dispatcher import NotificationDispatcher
from notifier.notifications.models import ChannelKind


class NotificationFacade:

    def __init__(self, dispatcher: NotificationDispatcher) -> None:
        self._dispatcher = dispatcher

    def send_sms(self, message: str) -> Any:
        return self._dispatcher.dispatch(ChannelKind.SMS, message)

    def send_email(self, message: str) -> Any:
        return self._dispatcher.dispatch(ChannelKind.EMAIL, message)

    def send_push(self, message: str) -> Any:
        return self._dispatcher.dispatch(ChannelKind.PUSH, message)

    def send_all(self, message: str) -> List[Any]:
        """Send through every registered kind, in sorted kind order."""
        return [
            self._dispatcher.dispatch(kind, message)
            for kind in self._dispatcher.registry.kinds()
        ]
