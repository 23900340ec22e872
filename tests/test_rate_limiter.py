import time

from iminfra.rate_limiter import TokenBucketRateLimiter


def test_burst_refill_and_reset():
    limiter = TokenBucketRateLimiter(2.0, 2.0)

    assert limiter.allow()
    assert limiter.allow()
    assert not limiter.allow()

    time.sleep(0.6)
    assert limiter.allow()

    limiter.reset(10.0, 1.0)
    assert limiter.allow()
    assert not limiter.allow()


def test_burst_is_at_least_one():
    limiter = TokenBucketRateLimiter(0.0, 0.2)
    assert limiter.allow()
    assert not limiter.allow()


def test_zero_rate_never_refills():
    limiter = TokenBucketRateLimiter(0.0, 1.0)
    assert limiter.allow()
    time.sleep(0.05)
    assert not limiter.allow()


def test_request_larger_than_burst_is_rejected():
    limiter = TokenBucketRateLimiter(1.0, 1.0)
    assert not limiter.allow(2.0)
    assert limiter.allow(1.0)


def test_multi_token_request():
    limiter = TokenBucketRateLimiter(0.0, 5.0)
    assert limiter.allow(3.0)
    assert limiter.allow(2.0)
    assert not limiter.allow(1.0)


def test_reset_refills_bucket():
    limiter = TokenBucketRateLimiter(0.0, 2.0)
    assert limiter.allow(2.0)
    assert not limiter.allow()
    limiter.reset(0.0, 2.0)
    assert limiter.allow(2.0)