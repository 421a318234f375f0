# src/bonehunt/mapgen/levels.py
# Difficulty curve: level number -> grid size, bone/mud counts, time budget.

import math
from dataclasses import dataclass

from ..config import DEFAULT_CONFIG, GameConfig


@dataclass(frozen=True)
class LevelConfig:
    width: int
    height: int
    bone_count: int
    mud_count: int
    time_budget_seconds: int

    @property
    def cells(self) -> int:
        return self.width * self.height


def grid_size_for_level(level: int, config: GameConfig = DEFAULT_CONFIG) -> int:
    grow = (level - 1) // config.levels_per_size_increase
    return min(config.base_size + grow, config.max_size)


def level_config(level: int, config: GameConfig = DEFAULT_CONFIG) -> LevelConfig:
    """
    Derive the level's parameters. Total for every level: anything below 1 is
    treated as 1, and the clamps keep bone_count + mud_count + 1 <= cells
    (the start cell always stays free).
    """
    level = max(1, int(level))
    size = grid_size_for_level(level, config)
    cells = size * size

    # Halves round up, not to even
    bones = min(config.base_bones + math.floor(level * config.bone_growth_rate + 0.5), cells - 2)
    mud = min(config.base_mud + level // config.mud_growth_divisor, cells - bones - 1)
    time_budget = max(config.min_time, config.base_time - math.floor(level * config.time_decay_rate))

    return LevelConfig(
        width=size,
        height=size,
        bone_count=bones,
        mud_count=mud,
        time_budget_seconds=time_budget,
    )
