# iminfra

Small, thread-safe building blocks for the infrastructure layer of a messaging server:

- `iminfra.circuit_breaker.CircuitBreaker`: trips open after a number of consecutive failures, then lets requests through again once a cool-down has passed.
- `iminfra.rate_limiter.TokenBucketRateLimiter`: a token bucket with a refill rate in tokens per second and a burst size.
- `iminfra.metrics_registry.MetricsRegistry`: counters, gauges and histograms, rendered in the Prometheus text exposition format.
- `iminfra.trace_context`: a per-thread `TraceContext`, the `ScopedTraceContext` context manager and a formatter for log lines.

The package has no dependencies outside the standard library.

## Installation

```
pip install iminfra
```

## Circuit breaker

```python
from iminfra.circuit_breaker import CircuitBreaker

breaker = CircuitBreaker(enabled=True, failure_threshold=2, half_open_after_ms=50)
if breaker.allow_request():
    try:
        call_backend()
    except Exception:
        breaker.record_failure()
    else:
        breaker.record_success()
```

The defaults are `enabled=False`, `failure_threshold=10` and
`half_open_after_ms=5000`. After `failure_threshold` consecutive failures the
breaker is open: `is_open()` returns `True` and `allow_request()` returns
`False`. Once `half_open_after_ms` milliseconds (measured with a monotonic
clock) have passed, the next `allow_request()` moves it to half-open and
returns `True`; while half-open, requests keep being allowed. `record_success()`
closes the breaker and clears the failure count; a further failure while
half-open opens it again, since the count was not cleared.

A disabled breaker always allows requests and ignores failures.
`configure(enabled, failure_threshold, half_open_after_ms)` replaces the
settings and resets the breaker to closed.

## Rate limiter

```python
from iminfra.rate_limiter import TokenBucketRateLimiter

limiter = TokenBucketRateLimiter(rate=2.0, burst=2.0)
limiter.allow()   # True
limiter.allow()   # True
limiter.allow()   # False until tokens refill
limiter.reset(10.0, 1.0)
```

The bucket starts full. `allow(tokens=1.0)` takes the tokens if enough are
available and returns whether it did. Tokens refill continuously at `rate` per
second up to `burst`; a rate of zero or less never refills. The burst is never
smaller than one token. `reset(rate, burst)` applies new settings and fills
the bucket.

## Metrics

```python
from iminfra.metrics_registry import MetricsRegistry

metrics = MetricsRegistry.instance()
metrics.set_enabled(True)
metrics.inc_counter("requests_total", 1.0, "Requests handled")
metrics.set_gauge("online_users", 42, "Users online")
metrics.observe("latency_ms", 12.5, help_text="Request latency")
print(metrics.render_prometheus())
```

`MetricsRegistry.instance()` returns one process-wide registry; a
`MetricsRegistry()` can also be created on its own. A registry starts out
disabled and ignores updates until `set_enabled(True)`; `enabled()` reports
the current setting.

- `inc_counter(name, delta=1.0, help_text="")` adds to a counter.
- `set_gauge(name, value, help_text="")` sets a gauge.
- `observe(name, value, help_text="")` records a histogram observation, using
  the bucket bounds 1, 5, 10, 50, 100, 250, 500, 1000 and 5000.

A non-empty `help_text` replaces the metric's help. `render_prometheus()`
writes all counters, then gauges, then histograms (cumulative `_bucket` lines
ending with `le="+Inf"`, then `_sum` and `_count`), each group in the order
the metrics were first recorded.

The helpers used for this are public too: `sanitize_name(name)` replaces every
UTF-8 byte outside `A-Z a-z 0-9 _ :` with `_` and turns an empty name into
`unnamed_metric`; `sanitize_help(help_text)` replaces newlines with spaces and
turns empty help into `no_help`.

## Trace context

```python
from iminfra.trace_context import (
    ScopedTraceContext,
    TraceContext,
    format_trace_context_for_log,
    generate_trace_id,
)

ctx = TraceContext(trace_id=generate_trace_id(), request_id=7, user_id="alice")
with ScopedTraceContext(ctx):
    print(format_trace_context_for_log())
    # trace_id=... request_id=7 session_id=- user_id=alice node_id=-
```

`TraceContext` holds `trace_id`, `request_id`, `session_id`, `user_id`,
`node_id`, `message_id` and `server_seq`. Each thread has its own current
context, managed with `set_current_trace_context`, `clear_current_trace_context`,
`has_current_trace_context` and `current_trace_context` (which returns a copy,
or an empty context when none is set). Entering a `ScopedTraceContext` installs
its context and returns a copy of it; leaving restores the context that was
current before, or clears it if there was none.

`format_trace_context_for_log()` writes empty string fields as `-` and adds
`message_id` and `server_seq` only when they are greater than zero.
`generate_trace_id()` joins the current time in microseconds, a process-wide
counter and the thread id, each in hexadecimal, with `-`.

## What this package does not do

It provides these helpers only. It has no server, no network code, no storage
and no command-line tool; in particular it does not serve the rendered metrics
over HTTP and does not write log lines itself.

## Running the tests

```
pip install -e ".[test]"
pytest
```