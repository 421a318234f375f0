# src/bonehunt/engine/player.py
# Direction intents and single-step movement clamped to the grid.

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

XY = Tuple[int, int]


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: object) -> Optional["Direction"]:
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


_DIRS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}


def _clamp(v: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, v))


def step(pos: XY, direction: Direction, width: int, height: int) -> XY:
    """One tile in ``direction``; a step off the edge stays on the edge."""
    dx, dy = _DIRS[direction]
    x, y = pos
    return (_clamp(x + dx, 0, width - 1), _clamp(y + dy, 0, height - 1))
