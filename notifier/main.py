"""
Demonstration entry point.

Run with:
    python -m notifier

Walks every component once: registry dispatch, decorators, flyweight
pool, time-of-day routing, subscriptions, facade, commands and groups.
Channel lines go to stdout; log records go to stderr.
"""

from __future__ import annotations

from datetime import datetime
from functools import partial
from typing import Optional, TextIO

from notifier.core.config import Settings, get_settings
from notifier.core.errors import UnknownChannelKind
from notifier.core.logging_config import get_logger, setup_logging
from notifier.notifications import (
    ChannelGroup,
    ChannelKind,
    ChannelSubscriber,
    CommandInvoker,
    DeliveryStore,
    LoggingDecorator,
    NotificationFacade,
    NotificationPool,
    PersistenceDecorator,
    SendCommand,
    SubscriptionRegistry,
    UnmatchedPolicy,
    build_dispatcher,
    build_time_window_chain,
    decorate,
)
from notifier.notifications.decorators import describe_chain, summarize_store

logger = get_logger(__name__)


def _section(title: str, out: Optional[TextIO]) -> None:
    print(f"\n── {title} ──", file=out)


def run_demo(settings: Optional[Settings] = None, out: Optional[TextIO] = None) -> DeliveryStore:
    """Run the walkthrough; returns the store filled by the persistence step."""
    settings = settings or get_settings()
    store = DeliveryStore()
    dispatcher = build_dispatcher(settings, out=out, store=store)
    registry = dispatcher.registry

    _section("Dispatch by kind", out)
    dispatcher.dispatch("SMS", "hello")
    try:
        dispatcher.dispatch("Fax", "hello")
    except UnknownChannelKind as exc:
        print(f"Rejected: {exc.message}", file=out)

    _section("Decorator chain", out)
    chained = decorate(
        registry.resolve(ChannelKind.EMAIL),
        partial(LoggingDecorator, out=out),
        partial(PersistenceDecorator, store=store, out=out),
    )
    logger.info("Chain: %s", " → ".join(describe_chain(chained)))
    chained.send("Quarterly report is ready")

    _section("Flyweight pool", out)
    pool = NotificationPool(registry.resolve(ChannelKind.PUSH))
    first = pool.get_shared("Server restarted")
    second = pool.get_shared("Server restarted")
    first.send()
    print(f"Shared instance reused: {first is second}", file=out)

    _section("Time-of-day routing", out)
    chain = build_time_window_chain(
        registry, settings.DELIVERY_WINDOWS, UnmatchedPolicy(settings.UNMATCHED_POLICY),
    )
    for hour in (10, 19, 23):
        chain.handle(f"Routed at {hour:02d}:00", at=datetime(2024, 1, 1, hour))

    _section("Subscriptions", out)
    subscriptions = SubscriptionRegistry()
    subscriptions.subscribe(ChannelSubscriber("alice", "sms", registry.resolve("sms")))
    subscriptions.subscribe(ChannelSubscriber("bob", "email", registry.resolve("email")))
    subscriptions.notify("Maintenance window tonight", ChannelKind.SMS)

    _section("Facade", out)
    NotificationFacade(dispatcher).send_all("System-wide announcement")

    _section("Commands and groups", out)
    everyone = ChannelGroup("everyone", [registry.resolve(k) for k in registry.kinds()])
    invoker = CommandInvoker()
    invoker.submit(SendCommand(registry.resolve("sms"), "Queued first"))
    invoker.submit(SendCommand(everyone, "Queued for everyone"))
    invoker.run()

    logger.info("Persisted deliveries by kind: %s", summarize_store(store))
    return store


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    logger.info("Starting %s demo [%s]", settings.APP_NAME, settings.ENVIRONMENT)
    run_demo(settings)
