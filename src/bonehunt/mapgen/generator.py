# src/bonehunt/mapgen/generator.py
# Level generator: empty grid, then bones, then mud. Unseeded calls are
# independent draws; pass a seeded random.Random to reproduce a layout.

import logging
import random
from typing import Optional

from ..config import DEFAULT_CONFIG, GameConfig
from ..grid import Grid
from .levels import LevelConfig, level_config
from .placement import PlacementError, apply_all_placements

logger = logging.getLogger(__name__)


def generate_grid(cfg: LevelConfig, rng: Optional[random.Random] = None) -> Grid:
    if cfg.bone_count + cfg.mud_count + 1 > cfg.cells:
        raise PlacementError(
            f"level needs {cfg.bone_count} bones + {cfg.mud_count} mud + start cell "
            f"but grid has only {cfg.cells} cells"
        )
    rng = rng or random.Random()

    grid = Grid.empty(cfg.width, cfg.height)
    bones, mud = apply_all_placements(grid, rng, cfg.bone_count, cfg.mud_count)
    logger.debug("Generated %dx%d grid: %d bones, %d mud", cfg.width, cfg.height, len(bones), len(mud))
    return grid


def generate_level(level: int, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None) -> Grid:
    return generate_grid(level_config(level, config), rng)
