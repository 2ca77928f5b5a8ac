import time
from dataclasses import dataclass
from typing import Callable, Optional

TOKEN_SAFETY_MARGIN_SECONDS = 60


@dataclass
class TokenCache:
    """Access token with the wall-clock time (epoch seconds) it expires at."""
    token: Optional[str] = None
    expires_at: float = 0.0

    def is_valid(self, now: float, safety_margin: float = TOKEN_SAFETY_MARGIN_SECONDS) -> bool:
        return bool(self.token) and now < self.expires_at - safety_margin

    def store(self, token: str, expires_in: float, now: float) -> None:
        self.token = token
        self.expires_at = now + expires_in

    def clear(self) -> None:
        self.token = None
        self.expires_at = 0.0


class CachedTokenProvider:
    """
    Returns the cached token while it is valid and calls fetch() for a new one otherwise.
    fetch() returns (access_token, expires_in_seconds). Two callers hitting an expired cache at
    the same time may both refresh; the later write wins.
    """

    def __init__(
        self,
        fetch: Callable[[], tuple[str, float]],
        cache: TokenCache | None = None,
        clock: Callable[[], float] = time.time,
        safety_margin: float = TOKEN_SAFETY_MARGIN_SECONDS,
    ):
        self.fetch = fetch
        self.cache = cache or TokenCache()
        self.clock = clock
        self.safety_margin = safety_margin

    def get_token(self) -> str:
        now = self.clock()
        if self.cache.is_valid(now, self.safety_margin):
            return self.cache.token
        token, expires_in = self.fetch()
        self.cache.store(token, expires_in, now)
        return token

    def invalidate(self) -> None:
        self.cache.clear()
