"""
Bounded retry for rate-limited send-message calls.

Only 429 responses are retried, and only when the caller passes an enabled
RetryConfig. Waits honour the `retry_after` value WasenderAPI returns in the
error body.
"""

import asyncio
import math
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from wasender.core.exceptions import RATE_LIMIT_STATUS, WasenderApiError
from wasender.core.logging.logger import ContextLogger, get_logger
from wasender.messaging.models.retry_models import RetryConfig

T = TypeVar("T")

DEFAULT_RETRY_AFTER = 1.0

SleepFunc = Callable[[float], Awaitable[Any]]


async def run_with_retry(
    operation: Callable[[], Awaitable[T]],
    retry_config: RetryConfig | None = None,
    *,
    sleep: SleepFunc = asyncio.sleep,
    logger: ContextLogger | None = None,
) -> T:
    """Run `operation`, retrying 429 failures according to `retry_config`.

    Args:
        operation: Zero-argument coroutine factory issuing one request
        retry_config: Retry policy; None behaves like RetryConfig()
        sleep: Awaitable used to wait between attempts
        logger: Logger for retry notices

    Returns:
        The result of the first successful attempt

    Raises:
        WasenderApiError: The last error once retries are disabled or exhausted,
            or immediately for any non-429 status
    """
    config = retry_config or RetryConfig()
    logger = logger or get_logger(__name__)

    for attempt in range(1, config.max_attempts + 1):
        try:
            return await operation()
        except WasenderApiError as error:
            if not (
                config.enabled
                and error.is_rate_limited
                and attempt <= config.max_retries
            ):
                raise

            wait = error.retry_after
            if wait is None or not math.isfinite(wait) or wait < 0:
                wait = DEFAULT_RETRY_AFTER

            logger.warning(
                f"Rate limited on attempt {attempt}/{config.max_attempts}, "
                f"retrying in {wait:g}s"
            )
            await sleep(wait)

    raise WasenderApiError("Max retries exceeded", RATE_LIMIT_STATUS)
