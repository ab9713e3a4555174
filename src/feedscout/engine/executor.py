"""Bounded-concurrency executor for validation tasks."""

import asyncio
from collections import deque
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def process_concurrently(
    items: Iterable[T],
    task: Callable[[T], Awaitable[Any]],
    *,
    concurrency: int,
    should_stop: Optional[Callable[[], bool]] = None,
) -> None:
    """Run ``task`` for every item with at most ``concurrency`` in flight.

    Tasks are started in item order. Once per scheduling cycle ``should_stop``
    is consulted; when it returns True no further tasks are started, while the
    ones already running are awaited to completion. An exception escaping a
    task is logged and does not affect the other tasks.

    Args:
        items: Items to process.
        task: Coroutine function called once per item.
        concurrency: Maximum number of simultaneously running tasks.
        should_stop: Cooperative stop signal.

    Raises:
        ValueError: If ``concurrency`` is lower than 1.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    queue = deque(items)
    active: set[asyncio.Future] = set()

    try:
        while queue or active:
            if should_stop is not None and queue and should_stop():
                logger.debug("Stop requested", skipped=len(queue), in_flight=len(active))
                queue.clear()

            while queue and len(active) < concurrency:
                active.add(asyncio.ensure_future(task(queue.popleft())))

            if not active:
                break

            done, active = await asyncio.wait(active, return_when=asyncio.FIRST_COMPLETED)

            for future in done:
                if future.cancelled():
                    continue
                error = future.exception()
                if error is not None:
                    logger.warning("Task failed", error=repr(error))
    except asyncio.CancelledError:
        for future in active:
            future.cancel()
        raise
