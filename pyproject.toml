[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iminfra"
version = "1.0.0"
description = "Thread-safe infrastructure helpers for messaging servers: circuit breaker, token-bucket rate limiter, Prometheus-style metrics and per-thread trace context."
requires-python = ">=3.10"
dependencies = []
keywords = ["circuit-breaker", "rate-limiter", "token-bucket", "metrics", "prometheus", "tracing"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iminfra"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
