from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set, Tuple

from .tiles import Tile

XY = Tuple[int, int]
ORIGIN: XY = (0, 0)


@dataclass
class Grid:
    rows: List[List[Tile]]

    @classmethod
    def empty(cls, width: int, height: int) -> "Grid":
        return cls(rows=[[Tile.EMPTY] * width for _ in range(height)])

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def get(self, x: int, y: int) -> Tile:
        return self.rows[y][x]

    def set(self, x: int, y: int, v: Tile) -> None:
        self.rows[y][x] = v

    def count(self, tile: Tile) -> int:
        return sum(1 for row in self.rows for t in row if t == tile)

    def positions_of(self, tile: Tile) -> Set[XY]:
        return {(x, y) for y, row in enumerate(self.rows) for x, t in enumerate(row) if t == tile}

    def frozen(self) -> Tuple[Tuple[Tile, ...], ...]:
        return tuple(tuple(row) for row in self.rows)
