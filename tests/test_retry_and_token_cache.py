import pytest

from playlist.infrastructure.client.retry_policy import RetryPolicy
from playlist.infrastructure.client.token_cache import CachedTokenProvider, TokenCache


class Flaky:
    def __init__(self, failures, exc=ConnectionError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self, value):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc(f"failure {self.calls}")
        return value


# ============= RetryPolicy =============


def test_retry_until_success_with_backoff_and_notifications():
    sleeps, notices = [], []
    policy = RetryPolicy(
        max_attempts=4,
        delay_seconds=1.0,
        backoff_factor=2.0,
        on_retry=lambda attempt, delay, exc: notices.append((attempt, delay, str(exc))),
        sleep=sleeps.append,
    )
    fn = Flaky(failures=2)

    assert policy.run(fn, "ok") == "ok"
    assert fn.calls == 3
    assert sleeps == [1.0, 2.0]
    assert notices == [(1, 1.0, "failure 1"), (2, 2.0, "failure 2")]


def test_retry_gives_up_after_max_attempts():
    sleeps = []
    policy = RetryPolicy(max_attempts=3, delay_seconds=0.5, backoff_factor=1.0, sleep=sleeps.append)
    fn = Flaky(failures=10)

    with pytest.raises(ConnectionError, match="failure 3"):
        policy.run(fn, "never")
    assert fn.calls == 3
    assert sleeps == [0.5, 0.5]


def test_non_retryable_errors_propagate_immediately():
    sleeps = []
    policy = RetryPolicy(max_attempts=5, retry_on=(ConnectionError,), sleep=sleeps.append)
    fn = Flaky(failures=1, exc=KeyError)

    with pytest.raises(KeyError):
        policy.run(fn, "x")
    assert fn.calls == 1
    assert sleeps == []


def test_should_retry_filter():
    policy = RetryPolicy(max_attempts=5, should_retry=lambda exc: "retry" in str(exc), sleep=lambda _: None)

    def fail():
        raise ValueError("fatal")

    with pytest.raises(ValueError):
        policy.run(fail)


def test_run_waits_are_capped_between_attempts():
    sleeps, notices = [], []
    policy = RetryPolicy(
        max_attempts=4,
        delay_seconds=10,
        backoff_factor=3,
        max_delay_seconds=25,
        on_retry=lambda attempt, delay, exc: notices.append((attempt, delay)),
        sleep=sleeps.append,
    )

    with pytest.raises(ConnectionError):
        policy.run(Flaky(failures=10), "never")
    assert sleeps == [10, 25, 25]
    assert notices == [(1, 10), (2, 25), (3, 25)]


def test_delay_is_capped():
    policy = RetryPolicy(delay_seconds=10, backoff_factor=3, max_delay_seconds=45)

    assert [policy.delay_for(n) for n in (1, 2, 3)] == [10, 30, 45]


# ============= TokenCache =============


def test_token_cache_validity_respects_safety_margin():
    cache = TokenCache()
    assert cache.is_valid(now=0) is False

    cache.store("tok", expires_in=3600, now=1000)

    assert cache.is_valid(now=1000) is True
    assert cache.is_valid(now=1000 + 3600 - 61) is True
    assert cache.is_valid(now=1000 + 3600 - 60) is False
    assert cache.is_valid(now=1000 + 3600 - 60, safety_margin=0) is True


def test_provider_reuses_token_until_expiry():
    clock = {"now": 0.0}
    issued = []

    def fetch():
        issued.append(len(issued) + 1)
        return f"token-{len(issued)}", 3600

    provider = CachedTokenProvider(fetch, clock=lambda: clock["now"])

    assert provider.get_token() == "token-1"
    clock["now"] = 3000
    assert provider.get_token() == "token-1"
    clock["now"] = 3541
    assert provider.get_token() == "token-2"
    assert issued == [1, 2]


def test_provider_invalidate_forces_refresh():
    tokens = iter([("a", 3600), ("b", 3600)])
    provider = CachedTokenProvider(lambda: next(tokens), clock=lambda: 0.0)

    assert provider.get_token() == "a"
    provider.invalidate()
    assert provider.get_token() == "b"
