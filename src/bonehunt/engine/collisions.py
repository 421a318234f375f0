# src/bonehunt/engine/collisions.py
# Enter effects for the player token (no pygame).
# Bones are written back to EMPTY on pickup; mud is left in place so every
# revisit slows the player again.

from __future__ import annotations

from typing import Dict

from ..grid import Grid
from ..tiles import Tile, is_collectible, is_hazard


def on_enter_player(grid: Grid, x: int, y: int) -> Dict[str, bool]:
    events = {"bone_collected": False, "mud_entered": False}

    tile = grid.get(x, y)
    if is_collectible(tile):
        grid.set(x, y, Tile.EMPTY)
        events["bone_collected"] = True
        return events

    if is_hazard(tile):
        events["mud_entered"] = True

    return events
