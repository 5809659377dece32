# src/logging/context.py — v1
"""Contextual logging support: attach report and record ids to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set once per run (report) and once per assembled record.
_report: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "report", default=None
)
_record: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "record", default=None
)


@dataclass
class LogContext:
    """Snapshot of current logging context."""

    report: str | None = None
    record: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(report=_report.get(), record=_record.get())


def set_report_context(report: str) -> None:
    """Set run-level context (called once per processed report)."""
    _report.set(report)


def set_record_context(record: str | None) -> None:
    """Set record-level context (called per assembled package)."""
    _record.set(record)


def clear_context() -> None:
    """Reset all context variables."""
    _report.set(None)
    _record.set(None)
