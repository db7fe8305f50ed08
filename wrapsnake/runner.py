"""Drives a GameEngine from a repeating timer and publishes its updates."""

import logging
from typing import Awaitable, Callable, Optional

from .game import GameEngine
from .models import GameEvent, Snapshot, Status
from .ticker import RepeatingTimer

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[Snapshot, GameEvent], Awaitable[None]]


class SessionRunner:
    """
    Timing driver for one game session.

    The timer is torn down and rebuilt whenever the interval changes, is
    stopped on game over and on teardown, and restarts at the base interval
    on reset.
    """

    def __init__(self, engine: GameEngine, on_update: Optional[UpdateCallback] = None) -> None:
        self.engine = engine
        self._on_update = on_update
        self._timer: RepeatingTimer | None = None

    @property
    def is_ticking(self) -> bool:
        return self._timer is not None and self._timer.is_running

    @property
    def timer(self) -> RepeatingTimer | None:
        return self._timer

    def snapshot(self) -> Snapshot:
        return self.engine.snapshot()

    async def start(self) -> None:
        if self.is_ticking:
            return
        await self._reschedule()
        logger.info("Session runner started")

    async def stop(self) -> None:
        await self._cancel_timer()
        logger.info("Session runner stopped")

    async def turn(self, heading) -> GameEvent:
        event = self.engine.request_heading_change(heading)
        if event is not GameEvent.NONE:
            await self._publish(event)
        return event

    async def set_speed(self, multiplier) -> bool:
        if not self.engine.set_tick_interval(multiplier):
            return False
        await self._reschedule()
        await self._publish(GameEvent.NONE)
        return True

    async def reset(self) -> Snapshot:
        snapshot = self.engine.reset()
        await self._reschedule()
        await self._publish(GameEvent.NONE)
        return snapshot

    async def _reschedule(self) -> None:
        await self._cancel_timer()
        snapshot = self.engine.snapshot()
        if snapshot.status is not Status.RUNNING:
            return
        self._timer = RepeatingTimer(snapshot.tick_interval_ms / 1000, self._on_tick)
        self._timer.start()

    async def _cancel_timer(self) -> None:
        if self._timer is None:
            return
        timer, self._timer = self._timer, None
        await timer.cancel()

    async def _on_tick(self) -> None:
        event = self.engine.advance_tick()
        if self.engine.snapshot().status is Status.OVER:
            await self._cancel_timer()
        await self._publish(event)

    async def _publish(self, event: GameEvent) -> None:
        if self._on_update is None:
            return
        await self._on_update(self.engine.snapshot(), event)
