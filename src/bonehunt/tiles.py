# Canonical tile values. A cell only ever changes BONE -> EMPTY.

from enum import IntEnum


class Tile(IntEnum):
    EMPTY = 0
    BONE = 1
    MUD = 2


# One-character glyphs for TSV dumps and text rendering
GLYPHS = {
    Tile.EMPTY: ".",
    Tile.BONE: "B",
    Tile.MUD: "M",
}


def is_hazard(tile: int) -> bool:
    return tile == Tile.MUD


def is_collectible(tile: int) -> bool:
    return tile == Tile.BONE
