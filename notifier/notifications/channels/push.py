"""
push.py — Push notification channel.

Simulation only: nothing is handed to a push service.
"""

from __future__ import annotations

from notifier.notifications.channels.base import TemplateChannel
from notifier.notifications.models import ChannelKind


class PushChannel(TemplateChannel):
    """Writes ``Sending Push Notification: <message>``."""

    kind = ChannelKind.PUSH.value
    label = "Push Notification"
