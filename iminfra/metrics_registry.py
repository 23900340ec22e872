"""Counters, gauges and histograms rendered in the Prometheus text format."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import ClassVar, Optional

_DEFAULT_HISTOGRAM_BOUNDS = (1.0, 5.0, 10.0, 50.0, 100.0, 250.0, 500.0, 1000.0, 5000.0)

_VALID_NAME_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_:"
)


def sanitize_name(name: str) -> str:
    """Replace every byte outside ``[A-Za-z0-9_:]`` with an underscore."""
    sanitized = "".join(
        chr(byte) if byte in _VALID_NAME_BYTES else "_" for byte in name.encode("utf-8")
    )
    return sanitized or "unnamed_metric"


def sanitize_help(help_text: str) -> str:
    """Flatten help text onto one line, with a placeholder when empty."""
    if not help_text:
        return "no_help"
    return help_text.replace("\n", " ")


def _fmt(value: float) -> str:
    return format(value, "g")


@dataclass
class _Counter:
    value: float = 0.0
    help: str = ""


@dataclass
class _Gauge:
    value: float = 0.0
    help: str = ""


@dataclass
class _Histogram:
    bounds: tuple = _DEFAULT_HISTOGRAM_BOUNDS
    bucket_counts: list = field(
        default_factory=lambda: [0] * (len(_DEFAULT_HISTOGRAM_BOUNDS) + 1)
    )
    sum: float = 0.0
    count: int = 0
    help: str = ""


class MetricsRegistry:
    """Thread-safe store of metrics; recording is a no-op while disabled."""

    _instance: ClassVar[Optional["MetricsRegistry"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._enabled = False
        self._counters: dict[str, _Counter] = {}
        self._gauges: dict[str, _Gauge] = {}
        self._histograms: dict[str, _Histogram] = {}

    @classmethod
    def instance(cls) -> "MetricsRegistry":
        """Return the process-wide registry."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def set_enabled(self, enabled: bool) -> None:
        with self._lock:
            self._enabled = enabled

    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    def inc_counter(self, name: str, delta: float = 1.0, help_text: str = "") -> None:
        """Add ``delta`` to a counter."""
        with self._lock:
            if not self._enabled:
                return
            metric = self._counters.setdefault(sanitize_name(name), _Counter())
            metric.value += delta
            if help_text:
                metric.help = help_text

    def observe(self, name: str, value: float, help_text: str = "") -> None:
        """Record one observation in a histogram."""
        with self._lock:
            if not self._enabled:
                return
            metric = self._histograms.setdefault(sanitize_name(name), _Histogram())
            if help_text:
                metric.help = help_text
            metric.sum += value
            metric.count += 1
            index = next(
                (i for i, bound in enumerate(metric.bounds) if value <= bound),
                len(metric.bounds),
            )
            metric.bucket_counts[index] += 1

    def set_gauge(self, name: str, value: float, help_text: str = "") -> None:
        """Set a gauge to ``value``."""
        with self._lock:
            if not self._enabled:
                return
            metric = self._gauges.setdefault(sanitize_name(name), _Gauge())
            metric.value = value
            if help_text:
                metric.help = help_text

    def render_prometheus(self) -> str:
        """Render every metric in the Prometheus text exposition format."""
        with self._lock:
            lines: list[str] = []
            for name, counter in self._counters.items():
                lines.append(f"# HELP {name} {sanitize_help(counter.help)}")
                lines.append(f"# TYPE {name} counter")
                lines.append(f"{name} {_fmt(counter.value)}")
            for name, gauge in self._gauges.items():
                lines.append(f"# HELP {name} {sanitize_help(gauge.help)}")
                lines.append(f"# TYPE {name} gauge")
                lines.append(f"{name} {_fmt(gauge.value)}")
            for name, hist in self._histograms.items():
                lines.append(f"# HELP {name} {sanitize_help(hist.help)}")
                lines.append(f"# TYPE {name} histogram")
                cumulative = 0
                for bound, count in zip(hist.bounds, hist.bucket_counts):
                    cumulative += count
                    lines.append(f'{name}_bucket{{le="{_fmt(bound)}"}} {cumulative}')
                cumulative += hist.bucket_counts[-1]
                lines.append(f'{name}_bucket{{le="+Inf"}} {cumulative}')
                lines.append(f"{name}_sum {_fmt(hist.sum)}")
                lines.append(f"{name}_count {hist.count}")
            return "".join(line + "\n" for line in lines)