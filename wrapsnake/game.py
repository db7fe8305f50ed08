"""Core game state and logic."""

import logging
import math
import random
import threading
from dataclasses import replace
from typing import Optional

from .constants import (
    GRID_SIZE, BASE_TICK_INTERVAL_MS, DIRECTIONS,
    MIN_SPEED_MULTIPLIER, MAX_SPEED_MULTIPLIER,
)
from .grid import Position, contains, positions_equal, random_position, step
from .models import DEFAULT_HEADING, GameEvent, Heading, SessionState, Snapshot, Status

logger = logging.getLogger(__name__)


class GameEngine:
    """
    Owns a single game session and the rules that advance it.
    Every public operation runs under one lock so a timer callback and an
    input handler can drive the same engine from different contexts.
    """

    def __init__(
        self,
        grid_size: int = GRID_SIZE,
        base_interval_ms: float = BASE_TICK_INTERVAL_MS,
        rng: Optional[random.Random] = None,
        state: Optional[SessionState] = None,
    ):
        self.grid_size = grid_size
        self.base_interval_ms = base_interval_ms
        self.rng = rng or random.Random()
        self._lock = threading.Lock()
        if state is None:
            self._reset_state()
        else:
            self._state = replace(state, segments=list(state.segments))

    @property
    def start_position(self) -> Position:
        return self.grid_size // 2, self.grid_size // 2

    def _reset_state(self):
        self._state = SessionState(
            segments=[self.start_position],
            heading=DEFAULT_HEADING,
            tick_interval_ms=self.base_interval_ms,
        )
        self._state.food = self._place_food()

    def _place_food(self) -> Optional[Position]:
        segments = self._state.segments
        if len(set(segments)) >= self.grid_size * self.grid_size:
            return None
        while True:
            candidate = random_position(self.grid_size, self.rng)
            if not contains(segments, candidate):
                return candidate

    def reset(self) -> Snapshot:
        with self._lock:
            self._reset_state()
            logger.info(f"Session reset, food at {self._state.food}")
            return self._snapshot()

    def advance_tick(self) -> GameEvent:
        with self._lock:
            state = self._state
            if state.status is Status.OVER:
                return GameEvent.NONE

            new_head = step(state.head(), DIRECTIONS[state.heading.value], self.grid_size)
            state.tick_number += 1

            if state.food is not None and positions_equal(new_head, state.food):
                state.segments.insert(0, new_head)
                state.score += 1
                state.food = self._place_food()
                event = GameEvent.CONSUMED
                if state.food is None:
                    state.status = Status.OVER
                    logger.info(f"Board filled at tick {state.tick_number}, score {state.score}")
            else:
                state.segments.insert(0, new_head)
                state.segments.pop()
                event = GameEvent.MOVED

            if contains(state.segments[1:], new_head):
                state.status = Status.OVER
                event = GameEvent.COLLIDED
                logger.info(
                    f"Collision at {new_head} on tick {state.tick_number}, "
                    f"final score {state.score}"
                )

            logger.debug(f"Tick {state.tick_number}: {event.value} head={new_head}")
            return event

    def request_heading_change(self, heading) -> GameEvent:
        """
        Point the snake in a new direction before the next tick.
        The direct reverse of the current heading is ignored; asking for the
        current heading again is accepted.
        """
        try:
            heading = Heading(heading.lower() if isinstance(heading, str) else heading)
        except (ValueError, TypeError):
            logger.debug(f"Ignoring unknown heading {heading!r}")
            return GameEvent.NONE

        with self._lock:
            state = self._state
            if state.status is Status.OVER:
                return GameEvent.NONE
            if heading is state.heading.reverse:
                logger.debug(f"Rejected reversal {state.heading.value} -> {heading.value}")
                return GameEvent.NONE
            state.heading = heading
            return GameEvent.TURNED

    def set_tick_interval(self, multiplier) -> bool:
        """Set the interval to base / multiplier. Returns False when ignored."""
        if (
            isinstance(multiplier, bool)
            or not isinstance(multiplier, (int, float))
            or (isinstance(multiplier, float) and not math.isfinite(multiplier))
            or multiplier <= 0
        ):
            logger.debug(f"Ignoring speed multiplier of type {type(multiplier).__name__}")
            return False
        multiplier = min(max(multiplier, MIN_SPEED_MULTIPLIER), MAX_SPEED_MULTIPLIER)

        with self._lock:
            state = self._state
            if state.status is Status.OVER:
                return False
            state.speed_multiplier = multiplier
            state.tick_interval_ms = self.base_interval_ms / multiplier
            logger.info(f"Speed set to {multiplier}x ({state.tick_interval_ms:.1f}ms)")
            return True

    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> Snapshot:
        state = self._state
        return Snapshot(
            segments=tuple(state.segments),
            food=state.food,
            heading=state.heading,
            score=state.score,
            status=state.status,
            tick_interval_ms=state.tick_interval_ms,
            speed_multiplier=state.speed_multiplier,
            tick_number=state.tick_number,
            grid_size=self.grid_size,
        )
