"""Duplicate call suppression for expensive async work."""

import asyncio
from collections.abc import Awaitable, Callable

from typing import Any, TypeVar

from src.helpers.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class SingleFlight:
    """Registry of in-flight calls keyed by name.

    The first caller for a key starts the work as a task and registers it.
    Callers arriving while it runs attach to the same task and receive its
    result or its exception. The key is released as soon as the task finishes,
    so the next call after completion starts fresh work.

    The task is shielded: cancelling one waiting caller does not cancel the
    work the other callers are waiting on.

    Example:
        ```python
        flight = SingleFlight()

        async def load() -> dict[str, str]:
            ...

        # Both callers share one load()
        a, b = await asyncio.gather(flight.do("cache", load), flight.do("cache", load))
        ```
    """

    def __init__(self) -> None:
        self._calls: dict[str, asyncio.Task[Any]] = {}

    def in_flight(self, key: str) -> bool:
        """Whether work for key is currently running."""
        return key in self._calls

    async def do(self, key: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Run fn once for all concurrent callers of key.

        Args:
            key: Name of the deduplicated operation
            fn: Zero-argument coroutine factory doing the work

        Returns:
            The shared result of fn
        """
        task = self._calls.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._calls[key] = task
            task.add_done_callback(lambda t, k=key: self._forget(k, t))
        else:
            logger.debug("joining in-flight call %s", key)

        return await asyncio.shield(task)

    def _forget(self, key: str, task: asyncio.Task[Any]) -> None:
        if self._calls.get(key) is task:
            del self._calls[key]
        # Retrieve the exception so an unawaited failure is not reported as lost
        if not task.cancelled():
            task.exception()


__all__ = ["SingleFlight"]
