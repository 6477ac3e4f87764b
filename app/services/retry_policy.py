"""Exponential backoff for remote calls that hit the employee API rate limit."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.core.config import Settings
from app.services.errors import RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 4
DEFAULT_INITIAL_BACKOFF_SECONDS = 0.2


class RateLimitRetryPolicy:
    """Retries an async operation only while it raises ``RateLimitedError``.

    The wait before retry ``n`` is ``initial_backoff * 2 ** (n - 1)`` seconds
    (0.2s, 0.4s, 0.8s with the defaults). Once ``max_attempts`` is reached the
    last ``RateLimitedError`` is re-raised unchanged; every other exception
    propagates on the first attempt.
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        initial_backoff: float = DEFAULT_INITIAL_BACKOFF_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._sleep = sleep
        self._set_limits(max_attempts, initial_backoff)

    def configure(self, settings: Settings) -> None:
        self._set_limits(settings.RETRY_MAX_ATTEMPTS, settings.RETRY_INITIAL_BACKOFF_SECONDS)

    def _set_limits(self, max_attempts: int, initial_backoff: float) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if initial_backoff < 0:
            raise ValueError("initial_backoff must not be negative")
        self.max_attempts = max_attempts
        self.initial_backoff = initial_backoff

    async def call(self, operation: Callable[[], Awaitable[T]], description: str = "remote call") -> T:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=self.initial_backoff),
            retry=retry_if_exception_type(RateLimitedError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=self._sleep,
            reraise=True,
        )
        logger.debug("Calling %s (max_attempts=%d)", description, self.max_attempts)
        async for attempt in retrying:
            with attempt:
                return await operation()
        raise AssertionError("retry loop exited without a result")
