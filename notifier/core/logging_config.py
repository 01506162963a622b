"""
Structured logging configuration.

Provides:
    • JSON-formatted logs for production (machine-parseable)
    • Pretty console logs for development (human-readable)
    • Dispatch-scoped context (kind, subscriber, ...) via a ContextVar

Channel output lines go to stdout; log records go to stderr so the two
never interleave in captured output.

Usage:
    from notifier.core.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__)
    with dispatch_context(kind="sms"):
        logger.info("Dispatching")
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from notifier.core.config import Settings, get_settings

# ── Context variable for dispatch-scoped data ──
_dispatch_context: ContextVar[Dict[str, Any]] = ContextVar(
    "dispatch_context", default={}
)

# Extra record attributes copied into JSON output when present
_EXTRA_KEYS = ("kind", "delivery_id", "subscriber", "group", "decorator")


def get_dispatch_context() -> Dict[str, Any]:
    """Get the current dispatch context."""
    return _dispatch_context.get()


@contextmanager
def dispatch_context(**kwargs: Any) -> Iterator[None]:
    """Attach key/values to every log record emitted inside the block."""
    merged = {**_dispatch_context.get(), **kwargs}
    token = _dispatch_context.set(merged)
    try:
        yield
    finally:
        _dispatch_context.reset(token)


# ── JSON Formatter (Production) ──

class JSONFormatter(logging.Formatter):
    """Machine-parseable JSON log output for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        ctx = get_dispatch_context()
        if ctx:
            log_entry["context"] = ctx

        for key in _EXTRA_KEYS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }

        return json.dumps(log_entry, default=str)


# ── Pretty Formatter (Development) ──

class PrettyFormatter(logging.Formatter):
    """Coloured human-readable format for local development."""

    COLORS = {
        "DEBUG": "\033[36m",    # Cyan
        "INFO": "\033[32m",     # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",    # Red
        "CRITICAL": "\033[35m", # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        ts = self.formatTime(record, "%H:%M:%S")
        msg = record.getMessage()

        ctx = get_dispatch_context()
        ctx_str = ""
        if ctx:
            ctx_str = " [" + " ".join(f"{k}={v}" for k, v in ctx.items()) + "]"

        tags = []
        kind = getattr(record, "kind", None)
        if kind and ctx.get("kind") != kind:
            tags.append(str(kind))
        delivery_id = getattr(record, "delivery_id", None)
        if delivery_id:
            tags.append(f"#{str(delivery_id)[:8]}")
        tag_str = f" ({' '.join(tags)})" if tags else ""

        formatted = (
            f"{color}{ts} {record.levelname:8s}{self.RESET}"
            f"{ctx_str} {record.name}{tag_str}: {msg}"
        )

        if record.exc_info and record.exc_info[1]:
            formatted += f"\n  {type(record.exc_info[1]).__name__}: {record.exc_info[1]}"

        return formatted


# ── Setup ──

def setup_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging based on environment."""
    settings = settings or get_settings()
    root = logging.getLogger()
    root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    # Remove existing handlers
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)

    if settings.use_json_logs:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(PrettyFormatter())

    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger — call once per module."""
    return logging.getLogger(name)
