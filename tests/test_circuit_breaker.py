import time

from iminfra.circuit_breaker import CircuitBreaker


def test_opens_and_half_opens_after_delay():
    breaker = CircuitBreaker(True, 2, 50)

    assert breaker.allow_request()
    breaker.record_failure()
    assert breaker.allow_request()

    breaker.record_failure()
    assert breaker.is_open()
    assert not breaker.allow_request()

    time.sleep(0.06)
    assert breaker.allow_request()

    breaker.record_success()
    assert not breaker.is_open()
    assert breaker.allow_request()


def test_disabled_breaker_never_opens():
    breaker = CircuitBreaker()
    for _ in range(50):
        breaker.record_failure()
    assert not breaker.is_open()
    assert breaker.allow_request()


def test_half_open_leaves_open_state():
    breaker = CircuitBreaker(True, 1, 0)
    breaker.record_failure()
    assert breaker.is_open()
    assert breaker.allow_request()
    assert not breaker.is_open()
    assert breaker.allow_request()


def test_failure_in_half_open_reopens():
    breaker = CircuitBreaker(True, 1, 0)
    breaker.record_failure()
    assert breaker.allow_request()
    breaker.record_failure()
    assert breaker.is_open()


def test_configure_resets_state():
    breaker = CircuitBreaker(True, 1, 10_000)
    breaker.record_failure()
    assert breaker.is_open()
    assert not breaker.allow_request()

    breaker.configure(True, 3, 10_000)
    assert not breaker.is_open()
    breaker.record_failure()
    breaker.record_failure()
    assert not breaker.is_open()
    breaker.record_failure()
    assert breaker.is_open()


def test_configure_can_disable():
    breaker = CircuitBreaker(True, 1, 10_000)
    breaker.record_failure()
    breaker.configure(False, 1, 10_000)
    breaker.record_failure()
    assert not breaker.is_open()
    assert breaker.allow_request()