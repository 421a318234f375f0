# src/bonehunt/engine/session.py
# SessionController: serializes intents into GameState transitions, owns the
# timed events (second tick, mud slow expiry, level-advance delay) and
# publishes a read-only snapshot after every applied transition.

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

from ..config import DEFAULT_CONFIG, GameConfig
from ..leaderboard import Leaderboard, ScoreEntry
from ..platform import Celebration, IdentityProvider, NullCelebration, resolve_display_name
from .player import Direction
from .state import GameSnapshot, GameState, Status
from .timing import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]


# ---- Intents ----
@dataclass(frozen=True)
class Move:
    direction: Direction


@dataclass(frozen=True)
class Tick:
    generation: Optional[int] = None


@dataclass(frozen=True)
class SlowExpire:
    generation: Optional[int] = None


@dataclass(frozen=True)
class AdvanceLevel:
    generation: Optional[int] = None


@dataclass(frozen=True)
class RetryLevel:
    pass


@dataclass(frozen=True)
class Restart:
    pass


class SessionController:
    def __init__(
        self,
        *,
        config: GameConfig = DEFAULT_CONFIG,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        identity: Optional[IdentityProvider] = None,
        celebration: Optional[Celebration] = None,
        leaderboard: Optional[Leaderboard] = None,
    ) -> None:
        self.config = config
        self.scheduler = scheduler or Scheduler()
        self.rng = rng
        self.identity = identity
        self.celebration = celebration or NullCelebration()
        self.leaderboard = leaderboard if leaderboard is not None else Leaderboard(config.leaderboard_size)

        self.display_name = config.default_display_name
        self._state: Optional[GameState] = None
        self._snapshot: Optional[GameSnapshot] = None
        self._listeners: List[Listener] = []

        self._queue: Deque[object] = deque()
        self._draining = False

        self._tick_handle: Optional[TimerHandle] = None
        self._slow_handle: Optional[TimerHandle] = None
        self._advance_handle: Optional[TimerHandle] = None

    # ---- Lifecycle ----
    def start(self, initial: Optional[GameState] = None) -> GameSnapshot:
        """Begin a session at level 1, or from ``initial`` when given (any pending timers are dropped)."""
        # Identity is read once per session and never touches game state.
        self.display_name = resolve_display_name(self.identity, self.config.default_display_name)
        logger.info("Session started for %s", self.display_name)
        self._install(initial or GameState.new_game(config=self.config, rng=self.rng))
        return self.snapshot

    @property
    def snapshot(self) -> GameSnapshot:
        if self._snapshot is None:
            raise RuntimeError("session not started")
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ---- Public intents ----
    def move(self, direction: Direction) -> None:
        self.submit(Move(direction))

    def tick(self) -> None:
        self.submit(Tick())

    def expire_slow(self) -> None:
        self.submit(SlowExpire())

    def advance(self) -> None:
        self.submit(AdvanceLevel())

    def retry(self) -> None:
        self.submit(RetryLevel())

    def restart(self) -> None:
        self.submit(Restart())

    def share(self) -> Optional[ScoreEntry]:
        """Send the current result to the share/leaderboard sink."""
        snap = self.snapshot
        entry = ScoreEntry(display_name=self.display_name, score=snap.score, level=snap.level)
        try:
            self.leaderboard.submit(entry)
        except Exception:
            logger.exception("Share sink rejected %r", entry)
            return None
        return entry

    def submit(self, intent: object) -> None:
        """Queue an intent; transitions are applied strictly one at a time."""
        if self._state is None:
            raise RuntimeError("session not started")
        self._queue.append(intent)
        if self._draining:
            return
        self._draining = True
        try:
            while self._queue:
                self._apply(self._queue.popleft())
        finally:
            self._draining = False

    # ---- Dispatch ----
    def _apply(self, intent: object) -> None:
        state = self._state
        assert state is not None
        before = state.status

        if isinstance(intent, Restart):
            self._install(state.restart(self.rng))
            return

        if isinstance(intent, RetryLevel):
            again = state.retry_level(self.rng)
            if again is not None:
                logger.debug("Retrying level %d", again.level)
                self._install(again)
            return

        if isinstance(intent, AdvanceLevel):
            if intent.generation not in (None, state.generation):
                return
            nxt = state.advance_level(self.rng)
            if nxt is not None:
                logger.debug("Advancing to level %d", nxt.level)
                self._install(nxt)
            return

        if isinstance(intent, Move):
            changed = state.move(intent.direction).moved
        elif isinstance(intent, Tick):
            if intent.generation not in (None, state.generation):
                return
            changed = state.tick()
        elif isinstance(intent, SlowExpire):
            if intent.generation not in (None, state.generation):
                return
            changed = state.expire_slow()
        else:
            logger.warning("Ignoring unknown intent %r", intent)
            return

        if not changed:
            return
        self._after_transition(before, state)
        self._publish()

    def _install(self, state: GameState) -> None:
        self._cancel_timers()
        self._state = state
        logger.debug("Level %d ready (%dx%d, %d bones, %ds)", state.level, state.grid.width,
                     state.grid.height, state.bones_total, state.seconds_remaining)
        self._schedule_tick(state)
        self._publish()

    def _after_transition(self, before: Status, state: GameState) -> None:
        after = state.status
        if after is before:
            return
        if after is Status.SLOWED:
            self._schedule_slow_expiry(state)
        elif before is Status.SLOWED:
            self._cancel(self._slow_handle)
        if not after.running:
            self._cancel_timers()
        if after is Status.LEVEL_COMPLETE:
            self._schedule_advance(state)
        self._celebrate(after)

    # ---- Timers ----
    def _schedule_tick(self, state: GameState) -> None:
        gen = state.generation

        def fire() -> None:
            if self._state is None or self._state.generation != gen or not self._state.status.running:
                return
            self.submit(Tick(gen))
            if self._state.generation == gen and self._state.status.running:
                self._schedule_tick(self._state)

        self._tick_handle = self.scheduler.call_later(self.config.tick_ms, fire, label="tick")

    def _schedule_slow_expiry(self, state: GameState) -> None:
        gen = state.generation
        self._cancel(self._slow_handle)
        self._slow_handle = self.scheduler.call_later(
            self.config.mud_lock_duration_ms, lambda: self.submit(SlowExpire(gen)), label="slow-expire"
        )

    def _schedule_advance(self, state: GameState) -> None:
        gen = state.generation
        self._cancel(self._advance_handle)
        self._advance_handle = self.scheduler.call_later(
            self.config.level_advance_delay_ms, lambda: self.submit(AdvanceLevel(gen)), label="advance"
        )

    @staticmethod
    def _cancel(handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()

    def _cancel_timers(self) -> None:
        for h in (self._tick_handle, self._slow_handle, self._advance_handle):
            self._cancel(h)
        self._tick_handle = self._slow_handle = self._advance_handle = None

    # ---- Outbound ----
    def _celebrate(self, status: Status) -> None:
        if status.value not in self.config.celebrate_on:
            return
        try:
            self.celebration.celebrate(status.value)
        except Exception:
            logger.exception("Celebration hook failed for %s", status.value)

    def _publish(self) -> None:
        assert self._state is not None
        self._snapshot = self._state.snapshot(self.display_name)
        for listener in list(self._listeners):
            try:
                listener(self._snapshot)
            except Exception:
                logger.exception("Snapshot listener %r failed", listener)
