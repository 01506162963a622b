"""
sms.py — SMS delivery channel.

Simulation only: the message is written as a single line, no gateway call
is made. SMS bodies are sent as-is; segmenting is the carrier's concern.
"""

from __future__ import annotations

from notifier.notifications.channels.base import TemplateChannel
from notifier.notifications.models import ChannelKind


class SmsChannel(TemplateChannel):
    """Writes ``Sending SMS: <message>``."""

    kind = ChannelKind.SMS.value
    label = "SMS"
