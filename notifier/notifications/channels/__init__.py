"""
channels — Per-channel delivery backends.

Each channel class exposes:
    send(message) → Delivery

Channels are stateless apart from their output stream. Cross-cutting
behaviour (logging, persistence) lives in decorators, not here.
"""

from notifier.notifications.channels.base import TemplateChannel
from notifier.notifications.channels.email import EmailChannel
from notifier.notifications.channels.push import PushChannel
from notifier.notifications.channels.sms import SmsChannel

__all__ = ["TemplateChannel", "SmsChannel", "EmailChannel", "PushChannel"]
