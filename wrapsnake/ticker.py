"""
Cancellable repeating timer for the game loop.
A timer never changes its interval; callers replace it instead.
"""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class RepeatingTimer:
    """Awaits `callback` every `interval` seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], Awaitable[None]]) -> None:
        self.interval = interval
        self._callback = callback
        self._task: asyncio.Task | None = None
        self._stop_event: asyncio.Event | None = None
        self._fired = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def fired(self) -> int:
        """Number of callbacks started so far."""
        return self._fired

    def start(self) -> None:
        if self._task is not None:
            return

        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run_loop())
        logger.debug(f"Timer started (interval: {self.interval * 1000:.1f}ms)")

    async def cancel(self) -> None:
        """
        Stop the timer.
        From inside the callback the loop just exits once the callback
        returns; from anywhere else the task is cancelled and awaited, even
        if a callback is mid-flight.
        """
        if self._task is None:
            return

        task, self._task = self._task, None
        self._stop_event.set()
        if task is asyncio.current_task():
            return

        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Timer cancelled")

    async def _run_loop(self) -> None:
        stop_event = self._stop_event
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self.interval)
                break
            except asyncio.TimeoutError:
                pass

            self._fired += 1
            await self._callback()
