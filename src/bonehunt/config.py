# src/bonehunt/config.py
# Every gameplay tunable lives here so variants differ by data, not by code.

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_CONFIG_PATH = "BONEHUNT_CONFIG"


@dataclass(frozen=True)
class GameConfig:
    # Grid size: base_size at level 1, +1 every levels_per_size_increase levels.
    base_size: int = 5
    max_size: int = 12
    levels_per_size_increase: int = 5

    # Bones: base_bones + level * bone_growth_rate, halves rounded up
    base_bones: int = 3
    bone_growth_rate: float = 1.0

    # Mud: base_mud + level // mud_growth_divisor
    base_mud: int = 3
    mud_growth_divisor: int = 2

    # Countdown: base_time - floor(level * time_decay_rate), floored at min_time
    base_time: int = 29
    min_time: int = 10
    time_decay_rate: float = 1.0

    max_level: int = 69

    # Wall-clock durations (ms) used by the session scheduler
    mud_lock_duration_ms: int = 300
    tick_ms: int = 1000
    level_advance_delay_ms: int = 1500

    # Collaborator defaults
    default_display_name: str = "You"
    leaderboard_size: int = 5
    celebrate_on: Tuple[str, ...] = ("won", "level_complete")

    def __post_init__(self) -> None:
        if self.base_size < 2:
            raise ValueError("base_size must be >= 2")
        if self.max_size < self.base_size:
            raise ValueError("max_size must be >= base_size")
        if self.levels_per_size_increase < 1:
            raise ValueError("levels_per_size_increase must be >= 1")
        if self.mud_growth_divisor < 1:
            raise ValueError("mud_growth_divisor must be >= 1")
        if self.base_bones < 0 or self.base_mud < 0:
            raise ValueError("base_bones and base_mud must be >= 0")
        if self.bone_growth_rate < 0 or self.time_decay_rate < 0:
            raise ValueError("growth and decay rates must be >= 0")
        if self.min_time < 1 or self.base_time < self.min_time:
            raise ValueError("need 1 <= min_time <= base_time")
        if self.max_level < 1:
            raise ValueError("max_level must be >= 1")
        if self.mud_lock_duration_ms < 0 or self.level_advance_delay_ms < 0:
            raise ValueError("durations must be >= 0")
        if self.tick_ms < 1:
            raise ValueError("tick_ms must be >= 1")
        if self.leaderboard_size < 1:
            raise ValueError("leaderboard_size must be >= 1")
        # JSON hands us lists; keep the frozen instance hashable.
        object.__setattr__(self, "celebrate_on", tuple(self.celebrate_on))

    def with_overrides(self, **overrides: Any) -> "GameConfig":
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["celebrate_on"] = list(self.celebrate_on)
        return d


DEFAULT_CONFIG = GameConfig()


def config_from_mapping(data: Dict[str, Any], base: GameConfig = DEFAULT_CONFIG) -> GameConfig:
    known = {f.name for f in fields(GameConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return replace(base, **data)


def load_config(path: os.PathLike | str, base: GameConfig = DEFAULT_CONFIG) -> GameConfig:
    """Read a JSON object of overrides and apply it on top of ``base``."""
    p = Path(path)
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{p}: expected a JSON object")
    cfg = config_from_mapping(data, base)
    logger.info("Loaded game config from %s (%d overrides)", p, len(data))
    return cfg


def config_from_env(environ: Optional[Dict[str, str]] = None) -> GameConfig:
    env = os.environ if environ is None else environ
    path = env.get(ENV_CONFIG_PATH)
    if not path:
        return DEFAULT_CONFIG
    return load_config(path)
