# src/bonehunt/render/tileset.py
from __future__ import annotations
import os
import pygame
from functools import lru_cache
from typing import Tuple

from ..tiles import GLYPHS, Tile

ASSET_DIR = os.path.join("assets", "images")
PLAYER_SPRITE = "player"

def _path_candidates(name: str) -> Tuple[str, ...]:
    return (
        os.path.join(ASSET_DIR, "tiles", f"{name}.png"),
        os.path.join(ASSET_DIR, f"{name}.png"),
    )

def fallback_color(name: str) -> Tuple[int, int, int, int]:
    if name == PLAYER_SPRITE: return (170, 110,  60, 255)   # dog
    if name == "bone":        return (250, 245, 225, 255)
    if name == "mud":         return (110,  80,  40, 255)
    return (255, 255, 255, 255)                             # empty

def fallback_glyph(name: str) -> str:
    if name == PLAYER_SPRITE:
        return "@"
    return GLYPHS[Tile[name.upper()]]

class Tileset:
    """
    Tiny cached loader:
      - Looks for assets/images/tiles/<name>.png, then assets/images/<name>.png
        (names: empty, bone, mud, player)
      - Falls back to a coloured square with a glyph
    """
    def __init__(self, tile_size: int, font=None):
        self.tile_size = tile_size
        self.font = font or pygame.font.SysFont(None, max(10, tile_size // 2))

    @lru_cache(maxsize=64)
    def get(self, name: str) -> pygame.Surface:
        for p in _path_candidates(name):
            if os.path.exists(p):
                img = pygame.image.load(p).convert_alpha()
                if img.get_size() != (self.tile_size, self.tile_size):
                    img = pygame.transform.scale(img, (self.tile_size, self.tile_size))
                return img
        img = pygame.Surface((self.tile_size, self.tile_size), pygame.SRCALPHA)
        img.fill(fallback_color(name))
        pygame.draw.rect(img, (120, 90, 60), img.get_rect(), 1)
        txt = self.font.render(fallback_glyph(name), True, (0, 0, 0))
        r = txt.get_rect(center=(self.tile_size // 2, self.tile_size // 2))
        img.blit(txt, r)
        return img

    def for_tile(self, tile: Tile) -> pygame.Surface:
        return self.get(Tile(tile).name.lower())

    def player(self) -> pygame.Surface:
        return self.get(PLAYER_SPRITE)
