"""Coordinate arithmetic for the wrap-around grid."""

import random
from typing import Iterable, Optional

Position = tuple[int, int]


def wrap(coordinate: int, axis_size: int) -> int:
    return (coordinate + axis_size) % axis_size


def positions_equal(a: Position, b: Position) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def contains(segments: Iterable[Position], position: Position) -> bool:
    return any(positions_equal(s, position) for s in segments)


def step(position: Position, delta: tuple[int, int], axis_size: int) -> Position:
    """Displace a position by one unit vector, wrapping both axes."""
    dx, dy = delta
    return wrap(position[0] + dx, axis_size), wrap(position[1] + dy, axis_size)


def random_position(axis_size: int, rng: Optional[random.Random] = None) -> Position:
    rng = rng or random
    return rng.randrange(axis_size), rng.randrange(axis_size)
