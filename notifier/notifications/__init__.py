"""
notifications — Channel dispatch and the composition tools around it.

Sub-modules:
    channels/      — SMS / Email / Push backends on a shared send pipeline
    models         — ChannelKind, Delivery, Sender / Subscriber protocols
    registry       — kind → channel factory mapping
    decorators     — logging / persistence wrappers and the delivery store
    flyweight      — shared notifications keyed by message text
    handlers       — time-of-day routing chain
    subscriptions  — preference-filtered subscriber fan-out
    commands       — deferred sends and their invoker
    composite      — groups of senders
    dispatcher     — client entry point and composition root
    facade         — one method per channel plus send_all
"""

from notifier.notifications.commands import CommandInvoker, SendCommand
from notifier.notifications.composite import ChannelGroup
from notifier.notifications.decorators import (
    DeliveryStore,
    LoggingDecorator,
    PersistenceDecorator,
    decorate,
)
from notifier.notifications.dispatcher import NotificationDispatcher, build_dispatcher
from notifier.notifications.facade import NotificationFacade
from notifier.notifications.flyweight import NotificationPool, SharedNotification
from notifier.notifications.handlers import (
    TimeWindowHandler,
    UnmatchedPolicy,
    build_time_window_chain,
)
from notifier.notifications.models import ChannelKind, Delivery
from notifier.notifications.registry import ChannelRegistry, build_default_registry
from notifier.notifications.subscriptions import ChannelSubscriber, SubscriptionRegistry

__all__ = [
    "ChannelGroup",
    "ChannelKind",
    "ChannelRegistry",
    "ChannelSubscriber",
    "CommandInvoker",
    "Delivery",
    "DeliveryStore",
    "LoggingDecorator",
    "NotificationDispatcher",
    "NotificationFacade",
    "NotificationPool",
    "PersistenceDecorator",
    "SendCommand",
    "SharedNotification",
    "SubscriptionRegistry",
    "TimeWindowHandler",
    "UnmatchedPolicy",
    "build_default_registry",
    "build_dispatcher",
    "build_time_window_chain",
    "decorate",
]
