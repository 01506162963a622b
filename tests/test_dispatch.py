"""
test_dispatch.py — Dispatcher, facade, commands, channel groups and the
end-to-end demo.

Covers:
    • dispatch by kind, injected senders, configured decorators
    • UnknownChannelKind instead of a "not supported" fallback line
    • Facade per-channel helpers and send_all
    • Command queue ordering and failure behaviour
    • Composite groups (nesting, flattening, cycles, failure propagation)

Run with:
    pytest tests/test_dispatch.py -v
"""

from __future__ import annotations

import io
import logging
from functools import partial

import pytest

from notifier.core.config import Settings
from notifier.core.errors import UnknownChannelKind
from notifier.core.logging_config import get_dispatch_context
from notifier.main import run_demo
from notifier.notifications.channels import EmailChannel, PushChannel, SmsChannel
from notifier.notifications.commands import CommandInvoker, SendCommand
from notifier.notifications.composite import ChannelGroup
from notifier.notifications.decorators import DeliveryStore, LoggingDecorator
from notifier.notifications.dispatcher import NotificationDispatcher, build_dispatcher
from notifier.notifications.facade import NotificationFacade
from notifier.notifications.registry import build_default_registry


def _make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class FailingSender:
    def send(self, message: str):
        raise RuntimeError(f"cannot send {message}")


class ContextRecorder(logging.Handler):
    """Keeps each record's logger name with the dispatch context at emit time."""

    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.seen = []

    def emit(self, record: logging.LogRecord) -> None:
        self.seen.append((record.name, dict(get_dispatch_context())))


# ═══════════════════════════════════════════════════════════════════════════
# Section 1: Dispatcher
# ═══════════════════════════════════════════════════════════════════════════

class TestDispatcher:
    """NotificationDispatcher and build_dispatcher."""

    def test_dispatch_prints_one_line(self, capsys):
        dispatcher = build_dispatcher(_make_settings())
        dispatcher.dispatch("SMS", "hello")

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 1
        assert "SMS" in lines[0]
        assert "hello" in lines[0]

    def test_unknown_kind_fails_without_output(self, capsys):
        dispatcher = build_dispatcher(_make_settings())
        with pytest.raises(UnknownChannelKind):
            dispatcher.dispatch("Fax", "hello")
        assert capsys.readouterr().out == ""

    def test_records_inside_dispatch_carry_kind(self, caplog):
        recorder = ContextRecorder()
        notifier_logger = logging.getLogger("notifier")
        notifier_logger.addHandler(recorder)
        try:
            with caplog.at_level(logging.DEBUG, logger="notifier"):
                dispatcher = build_dispatcher(_make_settings(), out=io.StringIO())
                dispatcher.dispatch("SMS", "hello")
        finally:
            notifier_logger.removeHandler(recorder)

        assert ("notifier.notifications.dispatcher", {"kind": "sms"}) in recorder.seen
        assert ("notifier.notifications.channels.base", {"kind": "sms"}) in recorder.seen
        assert get_dispatch_context() == {}

    def test_dispatch_returns_delivery(self):
        dispatcher = build_dispatcher(_make_settings(), out=io.StringIO())
        delivery = dispatcher.dispatch("push", "x")
        assert delivery.kind == "push"

    def test_send_with_injected_sender(self):
        buf = io.StringIO()
        dispatcher = NotificationDispatcher(build_default_registry(buf))
        dispatcher.send_with(EmailChannel(buf), "injected")
        assert buf.getvalue() == "Sending Email: injected\n"

    def test_wrappers_applied_to_injected_sender(self):
        buf = io.StringIO()
        dispatcher = NotificationDispatcher(
            build_default_registry(buf), [partial(LoggingDecorator, out=buf)],
        )
        dispatcher.send_with(SmsChannel(buf), "w")
        assert buf.getvalue().splitlines() == [
            "[log] before: w", "Sending SMS: w", "[log] after: w",
        ]

    def test_no_decorators_by_default(self):
        buf = io.StringIO()
        build_dispatcher(_make_settings(), out=buf).dispatch("email", "plain")
        assert buf.getvalue() == "Sending Email: plain\n"

    def test_configured_decorators(self):
        buf = io.StringIO()
        store = DeliveryStore()
        settings = _make_settings(
            ENABLE_LOGGING_DECORATOR=True, ENABLE_PERSISTENCE_DECORATOR=True,
        )
        dispatcher = build_dispatcher(settings, out=buf, store=store)
        dispatcher.dispatch("sms", "d")

        assert buf.getvalue().splitlines() == [
            "[log] before: d",
            "[db] saving: d",
            "Sending SMS: d",
            "[db] saved: d",
            "[log] after: d",
        ]
        assert [x.message for x in store.all()] == ["d"]

    def test_custom_registry(self):
        buf = io.StringIO()
        registry = build_default_registry(buf)
        registry.register("pager", lambda: PushChannel(buf))
        dispatcher = build_dispatcher(_make_settings(), registry=registry)
        dispatcher.dispatch("pager", "beep")
        assert buf.getvalue() == "Sending Push Notification: beep\n"

    def test_instances_are_independent(self):
        a = build_dispatcher(_make_settings(), out=io.StringIO())
        b = build_dispatcher(_make_settings(), out=io.StringIO())
        a.registry.register("fax", lambda: SmsChannel(io.StringIO()))
        assert "fax" not in b.registry


# ═══════════════════════════════════════════════════════════════════════════
# Section 2: Facade
# ═══════════════════════════════════════════════════════════════════════════

class TestFacade:
    """NotificationFacade."""

    def test_per_channel_helpers(self):
        buf = io.StringIO()
        facade = NotificationFacade(build_dispatcher(_make_settings(), out=buf))
        facade.send_sms("a")
        facade.send_email("b")
        facade.send_push("c")
        assert buf.getvalue().splitlines() == [
            "Sending SMS: a",
            "Sending Email: b",
            "Sending Push Notification: c",
        ]

    def test_send_all_hits_every_kind(self):
        buf = io.StringIO()
        facade = NotificationFacade(build_dispatcher(_make_settings(), out=buf))
        deliveries = facade.send_all("all")
        assert [d.kind for d in deliveries] == ["email", "push", "sms"]
        assert len(buf.getvalue().splitlines()) == 3


# ═══════════════════════════════════════════════════════════════════════════
# Section 3: Commands
# ═══════════════════════════════════════════════════════════════════════════

class TestCommands:
    """SendCommand and CommandInvoker."""

    def test_nothing_sent_until_run(self):
        buf = io.StringIO()
        invoker = CommandInvoker()
        invoker.submit(SendCommand(SmsChannel(buf), "later"))
        assert buf.getvalue() == ""
        assert invoker.pending == 1

    def test_runs_fifo(self):
        buf = io.StringIO()
        invoker = CommandInvoker()
        invoker.submit(SendCommand(SmsChannel(buf), "1"))
        invoker.submit(SendCommand(PushChannel(buf), "2"))
        results = invoker.run()

        assert [r.message for r in results] == ["1", "2"]
        assert buf.getvalue().splitlines() == [
            "Sending SMS: 1", "Sending Push Notification: 2",
        ]
        assert invoker.pending == 0
        assert all(c.executed for c in invoker.history)

    def test_failure_keeps_remaining_queued(self):
        buf = io.StringIO()
        invoker = CommandInvoker()
        invoker.submit(SendCommand(SmsChannel(buf), "ok"))
        invoker.submit(SendCommand(FailingSender(), "bad"))
        invoker.submit(SendCommand(SmsChannel(buf), "after"))

        with pytest.raises(RuntimeError):
            invoker.run()
        assert invoker.pending == 2
        assert len(invoker.history) == 1
        assert buf.getvalue() == "Sending SMS: ok\n"


# ═══════════════════════════════════════════════════════════════════════════
# Section 4: Channel groups
# ═══════════════════════════════════════════════════════════════════════════

class TestChannelGroup:
    """Composite fan-out."""

    def test_fans_out_in_order(self):
        buf = io.StringIO()
        group = ChannelGroup("ops", [SmsChannel(buf), EmailChannel(buf)])
        deliveries = group.send("deploy")
        assert [d.kind for d in deliveries] == ["sms", "email"]

    def test_nested_groups_flatten(self):
        buf = io.StringIO()
        inner = ChannelGroup("inner", [PushChannel(buf)])
        outer = ChannelGroup("outer", [SmsChannel(buf), inner])
        deliveries = outer.send("n")
        assert [d.kind for d in deliveries] == ["sms", "push"]
        assert buf.getvalue().splitlines() == [
            "Sending SMS: n", "Sending Push Notification: n",
        ]

    def test_add_remove(self):
        sms = SmsChannel(io.StringIO())
        group = ChannelGroup("g")
        group.add(sms)
        assert len(group) == 1
        assert group.remove(sms) is True
        assert group.remove(sms) is False
        assert group.send("x") == []

    def test_cannot_contain_itself(self):
        group = ChannelGroup("g")
        with pytest.raises(ValueError):
            group.add(group)

    def test_indirect_cycle_rejected(self):
        a = ChannelGroup("a")
        b = ChannelGroup("b", [a])
        c = ChannelGroup("c", [b])
        with pytest.raises(ValueError, match="cycle"):
            a.add(c)
        assert len(a) == 0
        assert a.send("x") == []

    def test_shared_child_is_not_a_cycle(self):
        buf = io.StringIO()
        shared = ChannelGroup("shared", [SmsChannel(buf)])
        outer = ChannelGroup("outer", [shared])
        outer.add(ChannelGroup("other", [shared]))
        assert outer.contains(shared)
        assert [d.kind for d in outer.send("x")] == ["sms", "sms"]

    def test_child_failure_propagates(self):
        buf = io.StringIO()
        group = ChannelGroup("g", [SmsChannel(buf), FailingSender(), PushChannel(buf)])
        with pytest.raises(RuntimeError):
            group.send("x")
        assert buf.getvalue() == "Sending SMS: x\n"


# ═══════════════════════════════════════════════════════════════════════════
# Section 5: Demo
# ═══════════════════════════════════════════════════════════════════════════

class TestDemo:
    """End-to-end walkthrough."""

    def test_run_demo(self):
        buf = io.StringIO()
        store = run_demo(_make_settings(ENABLE_PERSISTENCE_DECORATOR=True), out=buf)
        output = buf.getvalue()

        assert "Sending SMS: hello" in output
        assert "Rejected: Unknown channel kind: 'fax'" in output
        assert "Shared instance reused: True" in output
        assert "Sending Email: Routed at 10:00" in output
        assert "Sending SMS: Routed at 19:00" in output
        assert "Sending Push Notification: Routed at 23:00" in output
        assert "Sending SMS: alice: Maintenance window tonight" in output
        assert "bob: Maintenance window tonight" not in output
        # dispatch + decorated email + send_all over three kinds
        assert len(store) == 5
