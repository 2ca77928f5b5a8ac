import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Type

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_fixed,
)

from config.settings import RetrySettings


@dataclass
class RetryPolicy:
    """
    Sequential retry of a single outstanding call.

    - max_attempts: total tries including the first one
    - delay_for(n): wait before retry n (1-based), delay_seconds * backoff_factor ** (n - 1),
      capped at max_delay_seconds. backoff_factor=1 gives a fixed delay.
    - on_retry(attempt, delay, exc): called before each wait, e.g. to tell the user what is happening
    - should_retry(exc): extra filter on top of retry_on
    """
    max_attempts: int = 3
    delay_seconds: float = 1.0
    backoff_factor: float = 2.0
    max_delay_seconds: float = 30.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    should_retry: Optional[Callable[[BaseException], bool]] = None
    on_retry: Optional[Callable[[int, float, BaseException], None]] = None
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    @classmethod
    def from_settings(cls, settings: RetrySettings, **kwargs) -> "RetryPolicy":
        return cls(
            max_attempts=settings.max_attempts,
            delay_seconds=settings.delay_seconds,
            backoff_factor=settings.backoff_factor,
            max_delay_seconds=settings.max_delay_seconds,
            **kwargs,
        )

    def delay_for(self, attempt: int) -> float:
        delay = self.delay_seconds * (self.backoff_factor ** (attempt - 1))
        return min(delay, self.max_delay_seconds)

    def is_retryable(self, exc: BaseException) -> bool:
        if not isinstance(exc, self.retry_on):
            return False
        return self.should_retry(exc) if self.should_retry else True

    def _wait(self):
        if self.backoff_factor == 1:
            return wait_fixed(min(self.delay_seconds, self.max_delay_seconds))
        return wait_exponential(
            multiplier=self.delay_seconds,
            exp_base=self.backoff_factor,
            max=self.max_delay_seconds,
        )

    def _notify(self, retry_state: RetryCallState) -> None:
        if self.on_retry:
            self.on_retry(
                retry_state.attempt_number,
                retry_state.next_action.sleep,
                retry_state.outcome.exception(),
            )

    def run(self, fn: Callable, *args, **kwargs):
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self._wait(),
            retry=retry_if_exception(self.is_retryable),
            before_sleep=self._notify,
            sleep=self.sleep,
            reraise=True,
        )
        return retrying(fn, *args, **kwargs)
