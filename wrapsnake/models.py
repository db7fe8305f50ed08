"""Data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .constants import BASE_TICK_INTERVAL_MS, OPPOSITES
from .grid import Position


class Heading(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def reverse(self) -> "Heading":
        return Heading(OPPOSITES[self.value])


class Status(Enum):
    RUNNING = "running"
    OVER = "over"


class GameEvent(Enum):
    NONE = "none"
    TURNED = "turned"
    MOVED = "moved"
    CONSUMED = "consumed"
    COLLIDED = "collided"


DEFAULT_HEADING = Heading.RIGHT


@dataclass
class SessionState:
    segments: list = field(default_factory=list)
    heading: Heading = DEFAULT_HEADING
    food: Optional[Position] = None
    score: int = 0
    status: Status = Status.RUNNING
    tick_interval_ms: float = BASE_TICK_INTERVAL_MS
    speed_multiplier: float = 1
    tick_number: int = 0

    def head(self):
        return self.segments[0] if self.segments else None


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session, safe to hand to renderers."""

    segments: tuple[Position, ...]
    food: Optional[Position]
    heading: Heading
    score: int
    status: Status
    tick_interval_ms: float
    speed_multiplier: float
    tick_number: int
    grid_size: int

    @property
    def game_over(self) -> bool:
        return self.status is Status.OVER
