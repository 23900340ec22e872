"""A thread-safe circuit breaker that trips after consecutive failures."""

from __future__ import annotations

import enum
import threading
import time


class _State(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


def _now_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class CircuitBreaker:
    """Opens after a run of failures and lets a probe through after a delay."""

    def __init__(
        self,
        enabled: bool = False,
        failure_threshold: int = 10,
        half_open_after_ms: int = 5000,
    ) -> None:
        self._lock = threading.Lock()
        self._enabled = enabled
        self._failure_threshold = failure_threshold
        self._half_open_after_ms = half_open_after_ms
        self._state = _State.CLOSED
        self._consecutive_failures = 0
        self._opened_at_ms = 0

    def allow_request(self) -> bool:
        """Return whether a request may go through now."""
        with self._lock:
            if not self._enabled or self._state is _State.CLOSED:
                return True
            if (
                self._state is _State.OPEN
                and _now_ms() - self._opened_at_ms >= self._half_open_after_ms
            ):
                self._state = _State.HALF_OPEN
                return True
            return self._state is _State.HALF_OPEN

    def record_success(self) -> None:
        """Close the breaker and forget earlier failures."""
        with self._lock:
            self._consecutive_failures = 0
            self._state = _State.CLOSED
            self._opened_at_ms = 0

    def record_failure(self) -> None:
        """Count a failure, opening the breaker once the threshold is reached."""
        with self._lock:
            if not self._enabled:
                return
            self._consecutive_failures += 1
            if self._consecutive_failures >= self._failure_threshold:
                self._state = _State.OPEN
                self._opened_at_ms = _now_ms()

    def configure(
        self, enabled: bool, failure_threshold: int, half_open_after_ms: int
    ) -> None:
        """Replace the settings and reset the breaker to closed."""
        with self._lock:
            self._enabled = enabled
            self._failure_threshold = failure_threshold
            self._half_open_after_ms = half_open_after_ms
            self._state = _State.CLOSED
            self._consecutive_failures = 0
            self._opened_at_ms = 0

    def is_open(self) -> bool:
        """Return whether the breaker is currently open."""
        with self._lock:
            return self._state is _State.OPEN