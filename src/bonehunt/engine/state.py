# src/bonehunt/engine/state.py
# GameState: the one mutable session record and its transitions.
# Move/Tick/SlowExpire mutate in place; AdvanceLevel/RetryLevel/Restart build a new state.
# Invalid requests are no-ops (False / None), never exceptions.

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..config import DEFAULT_CONFIG, GameConfig
from ..grid import ORIGIN, Grid
from ..mapgen.generator import generate_grid
from ..mapgen.levels import level_config
from ..tiles import Tile
from .collisions import on_enter_player
from .player import Direction, step

logger = logging.getLogger(__name__)

XY = Tuple[int, int]

_generation = itertools.count(1)


class Status(Enum):
    PLAYING = "playing"
    SLOWED = "slowed"
    LEVEL_COMPLETE = "level_complete"
    WON = "won"
    LOST = "lost"

    @property
    def terminal(self) -> bool:
        return self in (Status.WON, Status.LOST)

    @property
    def running(self) -> bool:
        return self in (Status.PLAYING, Status.SLOWED)


@dataclass(frozen=True)
class MoveOutcome:
    moved: bool
    bone_collected: bool = False
    mud_entered: bool = False


NO_MOVE = MoveOutcome(moved=False)


@dataclass(frozen=True)
class GameSnapshot:
    generation: int
    level: int
    grid: Tuple[Tuple[Tile, ...], ...]
    player_pos: XY
    bones_total: int
    bones_remaining: int
    score: int
    seconds_remaining: int
    status: Status
    display_name: str = ""

    @property
    def slowed(self) -> bool:
        return self.status is Status.SLOWED

    @property
    def bones_collected(self) -> int:
        return self.bones_total - self.bones_remaining

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)


class GameState:
    def __init__(
        self,
        level: int,
        grid: Grid,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        score: int = 0,
        seconds_remaining: Optional[int] = None,
    ) -> None:
        self.config = config
        self.level = level
        self.grid = grid
        # Distinguishes this state from every earlier one; timed callbacks
        # scheduled against an older generation must not touch this one.
        self.generation = next(_generation)

        self.player_pos: XY = ORIGIN
        self.bones_total = grid.count(Tile.BONE)
        self.bones_remaining = self.bones_total
        self.score = score
        # Score carried in from earlier levels; a retry starts over from here.
        self.entry_score = score
        if seconds_remaining is None:
            seconds_remaining = level_config(level, config).time_budget_seconds
        self.seconds_remaining = seconds_remaining
        self.status = Status.PLAYING

    @classmethod
    def for_level(
        cls,
        level: int,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        score: int = 0,
        rng: Optional[random.Random] = None,
    ) -> "GameState":
        cfg = level_config(level, config)
        grid = generate_grid(cfg, rng)
        return cls(level, grid, config=config, score=score, seconds_remaining=cfg.time_budget_seconds)

    @classmethod
    def new_game(cls, *, config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None) -> "GameState":
        return cls.for_level(1, config=config, score=0, rng=rng)

    @property
    def slowed(self) -> bool:
        return self.status is Status.SLOWED

    # ---- Transitions ----
    def tick(self) -> bool:
        if not self.status.running:
            return False
        self.seconds_remaining -= 1
        if self.seconds_remaining <= 0:
            self.seconds_remaining = 0
            self.status = Status.LOST
            logger.debug("Level %d lost: timer expired with %d bones left", self.level, self.bones_remaining)
        return True

    def move(self, direction: Direction) -> MoveOutcome:
        if self.status is not Status.PLAYING:
            return NO_MOVE
        candidate = step(self.player_pos, direction, self.grid.width, self.grid.height)
        if candidate == self.player_pos:
            return NO_MOVE

        x, y = candidate
        ev = on_enter_player(self.grid, x, y)
        self.player_pos = candidate

        if ev["bone_collected"]:
            self.score += 1
            self.bones_remaining -= 1
            if self.bones_remaining == 0:
                self.status = Status.WON if self.level >= self.config.max_level else Status.LEVEL_COMPLETE
                logger.debug("Level %d cleared -> %s (score %d)", self.level, self.status.value, self.score)
        elif ev["mud_entered"]:
            self.status = Status.SLOWED

        return MoveOutcome(moved=True, bone_collected=ev["bone_collected"], mud_entered=ev["mud_entered"])

    def expire_slow(self) -> bool:
        if self.status is not Status.SLOWED:
            return False
        self.status = Status.PLAYING
        return True

    def advance_level(self, rng: Optional[random.Random] = None) -> Optional["GameState"]:
        if self.status is not Status.LEVEL_COMPLETE:
            return None
        return GameState.for_level(self.level + 1, config=self.config, score=self.score, rng=rng)

    def retry_level(self, rng: Optional[random.Random] = None) -> Optional["GameState"]:
        """Replay the current level on a fresh grid and full clock. Only after a loss."""
        if self.status is not Status.LOST:
            return None
        return GameState.for_level(self.level, config=self.config, score=self.entry_score, rng=rng)

    def restart(self, rng: Optional[random.Random] = None) -> "GameState":
        return GameState.new_game(config=self.config, rng=rng)

    # ---- Read side ----
    def snapshot(self, display_name: str = "") -> GameSnapshot:
        return GameSnapshot(
            generation=self.generation,
            level=self.level,
            grid=self.grid.frozen(),
            player_pos=self.player_pos,
            bones_total=self.bones_total,
            bones_remaining=self.bones_remaining,
            score=self.score,
            seconds_remaining=self.seconds_remaining,
            status=self.status,
            display_name=display_name,
        )
