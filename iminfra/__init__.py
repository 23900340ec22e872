"""Circuit breaker, token-bucket rate limiter, metrics registry and per-thread trace context."""

__version__ = "1.0.0"
__all__ = ["circuit_breaker", "rate_limiter", "metrics_registry", "trace_context"]