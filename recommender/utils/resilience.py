"""
Resilient call wrapper for store and provider calls.

One retry policy for every external call: exponential backoff with full jitter,
bounded attempts and total time, optional per-attempt timeout. Application errors
(RecommenderError) are never retried.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

import backoff
from backoff._typing import Details

from ..errors import RecommenderError
from ..models.config import RecommendationConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_application_error(exc: Exception) -> bool:
    return isinstance(exc, RecommenderError)


async def resilient_call(
    func: Callable[..., Awaitable[T]],
    *args,
    max_tries: int = 3,
    factor: float = 0.5,
    max_time: Optional[float] = None,
    timeout: Optional[float] = None,
    retry_on: Tuple[Type[Exception], ...] = (Exception,),
    label: str = "call",
    **kwargs,
) -> T:
    """
    Await ``func(*args, **kwargs)`` with retries.

    Args:
        max_tries: Total attempts including the first.
        factor: Backoff factor in seconds; waits are factor * 2**n with full jitter.
        max_time: Give up once this many seconds have elapsed across attempts.
        timeout: Per-attempt timeout; a timeout counts as a failed attempt.
        retry_on: Exception types that trigger a retry. Others propagate at once.
        label: Name used in log lines.

    Raises:
        The last exception once attempts are exhausted (TimeoutError for timeouts).
    """

    def _on_backoff(details: Details) -> None:
        logger.warning(
            "[retry] %s attempt=%d wait=%.2fs error=%r",
            label,
            details["tries"],
            details.get("wait", 0.0),
            details.get("exception"),
        )

    def _on_giveup(details: Details) -> None:
        if _is_application_error(details.get("exception")):
            return
        logger.warning(
            "[retry] %s giving up after %d attempt(s): %r",
            label,
            details["tries"],
            details.get("exception"),
        )

    @backoff.on_exception(
        backoff.expo,
        retry_on,
        max_tries=max_tries,
        max_time=max_time,
        giveup=_is_application_error,
        on_backoff=_on_backoff,
        on_giveup=_on_giveup,
        raise_on_giveup=True,
        logger=None,
        factor=factor,
    )
    async def _attempt() -> T:
        if timeout is None:
            return await func(*args, **kwargs)
        return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)

    return await _attempt()


def retry_options(config: RecommendationConfig, timeout: Optional[float] = None) -> dict:
    """resilient_call keyword arguments taken from the algorithm config."""
    return {
        "max_tries": config.retry_max_tries,
        "factor": config.retry_backoff_factor,
        "max_time": config.retry_max_time_seconds,
        "timeout": timeout,
    }
