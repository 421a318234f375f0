# src/bonehunt/mapgen/placement.py
import random
from typing import List, Set, Tuple

from ..grid import ORIGIN, Grid
from ..tiles import Tile

XY = Tuple[int, int]


class PlacementError(AssertionError):
    """The level asks for more tiles than the grid has free cells."""


def free_cells(grid: Grid) -> int:
    # Origin is reserved even while still EMPTY.
    return sum(1 for y in range(grid.height) for x in range(grid.width)
               if (x, y) != ORIGIN and grid.get(x, y) == Tile.EMPTY)


def place_random_tiles(grid: Grid, rng: random.Random, tile: Tile, count: int) -> List[XY]:
    """
    Rejection sampling:
    - Draw (x, y) uniformly over the whole grid.
    - Reject the origin and any cell that is not EMPTY.
    - Write the tile; repeat until ``count`` cells are placed.
    Returns the placed positions in draw order.
    """
    if count > free_cells(grid):
        raise PlacementError(
            f"cannot place {count} x {tile.name} on a {grid.width}x{grid.height} grid "
            f"with {free_cells(grid)} free cells"
        )
    placed: List[XY] = []
    while len(placed) < count:
        x = rng.randrange(grid.width)
        y = rng.randrange(grid.height)
        if (x, y) == ORIGIN:
            continue
        if grid.get(x, y) != Tile.EMPTY:
            continue
        grid.set(x, y, tile)
        placed.append((x, y))
    return placed


def apply_all_placements(grid: Grid, rng: random.Random, bone_count: int, mud_count: int) -> Tuple[Set[XY], Set[XY]]:
    """
    Order:
      1) bones
      2) mud (never on a bone)
    """
    bones = place_random_tiles(grid, rng, Tile.BONE, bone_count)
    mud = place_random_tiles(grid, rng, Tile.MUD, mud_count)
    return set(bones), set(mud)
