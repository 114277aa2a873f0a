"""HTTP client utilities and retry helpers."""

from asyncio import CancelledError, sleep
from collections.abc import Awaitable, Callable

from typing import Any, TypeVar

import httpx

from src.helpers.constants import (
    DEFAULT_TIMEOUT,
    MAX_RETRIES,
    RETRY_BASE_DELAY,
)
from src.helpers.exceptions import RetryExhaustedError
from src.helpers.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


async def retry_call(
    operation: Callable[[], Awaitable[T]],
    attempts: int = MAX_RETRIES,
    base_delay: float = RETRY_BASE_DELAY,
    max_delay: float | None = None,
    *,
    name: str | None = None,
    log_errors: bool = True,
) -> T:
    """Run an async operation with exponential backoff between attempts.

    The delay starts at ``base_delay`` and doubles after every failed attempt.
    There is no jitter and no state is kept between invocations.

    Args:
        operation: Zero-argument coroutine factory to run
        attempts: Maximum number of attempts (must be at least 1)
        base_delay: Delay in seconds before the second attempt
        max_delay: Optional cap on the delay between attempts
        name: Operation name used in log messages
        log_errors: Whether to log failed attempts

    Returns:
        The first successful result

    Raises:
        RetryExhaustedError: If every attempt failed; chained from the last error
        ValueError: If attempts is less than 1

    Example:
        ```python
        from src.helpers.http import retry_call

        data = await retry_call(lambda: client.get(url), attempts=2, base_delay=1.0)
        # Tries twice, sleeping 1s between the attempts
        ```
    """
    if attempts < 1:
        msg = f"attempts must be at least 1, got {attempts}"
        raise ValueError(msg)

    label = name or getattr(operation, "__name__", "operation")
    delay = base_delay
    last_exception: Exception | None = None

    for attempt in range(attempts):
        if attempt > 0:
            if log_errors:
                logger.debug("retrying %s in %.2fs", label, delay)
            await sleep(delay)
            delay *= 2
            if max_delay is not None:
                delay = min(delay, max_delay)

        try:
            return await operation()
        except CancelledError:
            raise
        except httpx.TimeoutException as e:
            last_exception = e
            if log_errors:
                logger.warning(
                    "%s timeout (attempt %d/%d)", label, attempt + 1, attempts
                )
        except Exception as e:
            last_exception = e
            if log_errors:
                logger.warning(
                    "%s error (attempt %d/%d): %s", label, attempt + 1, attempts, e
                )

    if log_errors:
        logger.error("%s failed after %d attempts", label, attempts)

    # last_exception is always set once the loop ran at least once
    raise RetryExhaustedError(attempts, last_exception) from last_exception  # type: ignore[arg-type]


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance
    """
    return httpx.AsyncClient(timeout=timeout, **kwargs)


__all__ = [
    "create_http_client",
    "retry_call",
]
