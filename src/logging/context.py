# src/logging/context.py — v2
"""Contextual logging support: attach the running feed operation to log records.

Each asyncio task gets its own copy of the context variables, so concurrent
load/save/validate calls tag their log lines independently.
"""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)
_source: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source", default=None
)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    operation: str | None = None
    source: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(operation=_operation.get(), source=_source.get())


def set_operation_context(operation: str, source: str | None = None) -> None:
    """Set the operation name (load, save, validate, fetch) and its data source."""
    _operation.set(operation)
    _source.set(source)


@contextmanager
def operation_context(operation: str, source: str | None = None) -> Iterator[None]:
    """Scope the operation context to a block, restoring the previous values."""
    op_token = _operation.set(operation)
    source_token = _source.set(source)
    try:
        yield
    finally:
        _source.reset(source_token)
        _operation.reset(op_token)


def clear_context() -> None:
    """Reset all context variables."""
    _operation.set(None)
    _source.set(None)
