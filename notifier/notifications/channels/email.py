"""
email.py — Email delivery channel.

Simulation only: no SMTP connection is opened.
"""

from __future__ import annotations

from notifier.notifications.channels.base import TemplateChannel
from notifier.notifications.models import ChannelKind


class EmailChannel(TemplateChannel):
    """Writes ``Sending Email: <message>``."""

    kind = ChannelKind.EMAIL.value
    label = "Email"
