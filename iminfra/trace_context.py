"""Per-thread trace context used to tag log lines."""

from __future__ import annotations

import dataclasses
import itertools
import threading
import time
from dataclasses import dataclass

_local = threading.local()
_counter = itertools.count(1)
_counter_lock = threading.Lock()


@dataclass
class TraceContext:
    """Identifiers that describe the work being done on the current thread."""

    trace_id: str = ""
    request_id: int = 0
    session_id: str = ""
    user_id: str = ""
    node_id: str = ""
    message_id: int = 0
    server_seq: int = 0


def _normalize(value: str) -> str:
    return value if value else "-"


def generate_trace_id() -> str:
    """Build a trace id from the time, a process counter and the thread id."""
    with _counter_lock:
        seq = next(_counter)
    return f"{time.time_ns() // 1000:x}-{seq:x}-{threading.get_ident():x}"


def set_current_trace_context(context: TraceContext) -> None:
    _local.context = dataclasses.replace(context)


def clear_current_trace_context() -> None:
    _local.context = None


def has_current_trace_context() -> bool:
    return getattr(_local, "context", None) is not None


def current_trace_context() -> TraceContext:
    """Return a copy of this thread's context, or an empty one."""
    context = getattr(_local, "context", None)
    return dataclasses.replace(context) if context is not None else TraceContext()


def format_trace_context_for_log() -> str:
    """Render this thread's context as ``key=value`` pairs."""
    context = current_trace_context()
    parts = [
        f"trace_id={_normalize(context.trace_id)}",
        f"request_id={context.request_id}",
        f"session_id={_normalize(context.session_id)}",
        f"user_id={_normalize(context.user_id)}",
        f"node_id={_normalize(context.node_id)}",
    ]
    if context.message_id > 0:
        parts.append(f"message_id={context.message_id}")
    if context.server_seq > 0:
        parts.append(f"server_seq={context.server_seq}")
    return " ".join(parts)


class ScopedTraceContext:
    """Install a context for a ``with`` block and restore the previous one after."""

    def __init__(self, context: TraceContext) -> None:
        self._context = context
        self._previous: TraceContext | None = None

    def __enter__(self) -> TraceContext:
        self._previous = (
            current_trace_context() if has_current_trace_context() else None
        )
        set_current_trace_context(self._context)
        return current_trace_context()

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._previous is not None:
            set_current_trace_context(self._previous)
        else:
            clear_current_trace_context()