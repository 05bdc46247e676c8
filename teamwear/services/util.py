from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Tuple

from teamwear.config import get_config


async def call_blocking(fn: Callable[..., Any], *args: Any, timeout: Optional[float] = None) -> Any:
    """Run a blocking data-access call in a worker thread, bounded by a timeout.

    Raises asyncio.TimeoutError when the call does not finish in time.
    """
    if timeout is None:
        timeout = get_config().fetch_timeout_seconds
    return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout)


class LatestOnly:
    """Tracks request generations so only the newest in-flight request may apply its result.

    Starting a request cancels the previous one if it is still running.
    """

    def __init__(self) -> None:
        self.generation = 0
        self._task: Optional[asyncio.Task] = None

    def start(self, coro: Awaitable[Any]) -> Tuple[int, asyncio.Task]:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self.generation += 1
        self._task = asyncio.ensure_future(coro)
        return self.generation, self._task

    def is_current(self, generation: int) -> bool:
        return generation == self.generation
