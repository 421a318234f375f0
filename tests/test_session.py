# tests/test_session.py
import logging
import random

from bonehunt.config import GameConfig
from bonehunt.engine.player import Direction
from bonehunt.engine.session import SessionController, SlowExpire
from bonehunt.engine.state import GameState, Status
from bonehunt.grid import Grid
from bonehunt.leaderboard import Leaderboard
from bonehunt.mapgen.levels import level_config
from bonehunt.platform import RecordingCelebration, StaticIdentity
from bonehunt.tiles import GLYPHS, Tile

UP, DOWN, LEFT, RIGHT = Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT

_FROM_GLYPH = {g: t for t, g in GLYPHS.items()}


def make_grid(*rows):
    return Grid(rows=[[_FROM_GLYPH[c] for c in row] for row in rows])


def make_session(config=GameConfig(), **kw):
    kw.setdefault("rng", random.Random(42))
    kw.setdefault("celebration", RecordingCelebration())
    return SessionController(config=config, **kw)


def walk_to(session, target):
    """Step towards target (x first, then y), waiting out any mud on the way."""
    while session.snapshot.player_pos != target:
        x, y = session.snapshot.player_pos
        tx, ty = target
        if x != tx:
            d = RIGHT if tx > x else LEFT
        else:
            d = DOWN if ty > y else UP
        session.move(d)
        if session.snapshot.status is Status.SLOWED:
            session.scheduler.advance(session.config.mud_lock_duration_ms)
        assert session.snapshot.status in (Status.PLAYING, Status.LEVEL_COMPLETE), session.snapshot.status
        if session.snapshot.status is Status.LEVEL_COMPLETE:
            return


def bone_positions(snap):
    return sorted((x, y) for y, row in enumerate(snap.grid) for x, t in enumerate(row) if t == Tile.BONE)


def test_start_builds_level_one_and_reads_identity_once():
    calls = []

    class Identity:
        def get_display_name(self):
            calls.append(1)
            return "brownie"

    s = make_session(identity=Identity())
    snap = s.start()
    lc = level_config(1)
    assert (snap.level, snap.score, snap.status) == (1, 0, Status.PLAYING)
    assert (snap.width, snap.height) == (lc.width, lc.height)
    assert snap.display_name == "brownie"
    s.move(RIGHT)
    s.scheduler.advance(5000)
    assert len(calls) == 1


def test_identity_failure_falls_back_to_default(caplog):
    class Broken:
        def get_display_name(self):
            raise RuntimeError("sdk offline")

    s = make_session(identity=Broken())
    with caplog.at_level(logging.WARNING):
        snap = s.start()
    assert snap.display_name == "You"
    assert "Identity lookup failed" in caplog.text
    assert make_session(identity=StaticIdentity("")).start().display_name == "You"


def test_timer_ticks_each_second_until_lost():
    s = make_session()
    budget = s.start().seconds_remaining
    s.scheduler.advance(999)
    assert s.snapshot.seconds_remaining == budget
    s.scheduler.advance(1)
    assert s.snapshot.seconds_remaining == budget - 1
    s.scheduler.advance((budget - 1) * 1000)
    assert s.snapshot.status is Status.LOST
    assert s.scheduler.pending() == 0
    s.move(RIGHT)
    assert s.snapshot.player_pos == (0, 0)


def test_mud_locks_movement_until_expiry():
    s = make_session()
    s.start(GameState(1, make_grid(".M.", "...", "..B")))
    s.move(RIGHT)
    assert s.snapshot.status is Status.SLOWED and s.snapshot.player_pos == (1, 0)
    s.move(RIGHT)
    s.move(DOWN)
    assert s.snapshot.player_pos == (1, 0), "moves must be ignored while slowed"
    s.scheduler.advance(s.config.mud_lock_duration_ms - 1)
    assert s.snapshot.status is Status.SLOWED
    s.scheduler.advance(1)
    assert s.snapshot.status is Status.PLAYING
    s.move(RIGHT)
    assert s.snapshot.player_pos == (2, 0)
    assert s.snapshot.grid[0][1] == Tile.MUD


def test_stale_slow_expiry_never_touches_a_new_state():
    s = make_session()
    first = GameState(1, make_grid(".M", ".B"))
    s.start(first)
    s.move(RIGHT)                       # slowed; expiry due at 300
    s.scheduler.advance(100)
    s.start(GameState(1, make_grid(".M", ".B")))
    s.scheduler.advance(100)
    s.move(RIGHT)                       # slowed again; expiry due at 500
    s.scheduler.advance(150)            # t=350: old expiry would have fired at 300
    assert s.snapshot.status is Status.SLOWED
    s.submit(SlowExpire(first.generation))
    assert s.snapshot.status is Status.SLOWED
    s.scheduler.advance(150)
    assert s.snapshot.status is Status.PLAYING


def test_restart_cancels_pending_slow_expiry():
    s = make_session()
    s.start(GameState(3, make_grid(".M", ".B"), score=7))
    s.move(RIGHT)
    s.restart()
    snap = s.snapshot
    assert (snap.level, snap.score, snap.status) == (1, 0, Status.PLAYING)
    assert s.scheduler.pending() == 1  # only the new level's tick


def test_retry_after_loss_replays_the_same_level():
    s = make_session()
    s.start(GameState(3, make_grid(".B", "B."), score=7, seconds_remaining=2))
    s.retry()
    assert s.snapshot.level == 3 and s.snapshot.seconds_remaining == 2, "retry is ignored while still playing"
    s.move(RIGHT)
    assert s.snapshot.score == 8
    s.scheduler.advance(2000)
    lost = s.snapshot
    assert lost.status is Status.LOST
    s.retry()
    snap = s.snapshot
    lc = level_config(3)
    assert (snap.level, snap.status, snap.score) == (3, Status.PLAYING, 7)
    assert snap.generation != lost.generation
    assert (snap.width, snap.bones_remaining, snap.seconds_remaining) == (lc.width, lc.bone_count, lc.time_budget_seconds)
    assert snap.player_pos == (0, 0)
    assert s.scheduler.pending() == 1  # only the retried level's tick
    s.scheduler.advance(1000)
    assert s.snapshot.seconds_remaining == lc.time_budget_seconds - 1


def test_level_complete_stops_clock_and_auto_advances():
    celebration = RecordingCelebration()
    s = make_session(celebration=celebration)
    s.start(GameState(1, make_grid(".B", ".."), seconds_remaining=5))
    s.move(RIGHT)
    assert s.snapshot.status is Status.LEVEL_COMPLETE
    assert celebration.reasons == ["level_complete"]
    s.scheduler.advance(1000)
    assert s.snapshot.seconds_remaining == 5, "clock must stop once the level is complete"
    s.scheduler.advance(s.config.level_advance_delay_ms - 1000)
    snap = s.snapshot
    lc = level_config(2)
    assert (snap.level, snap.score, snap.status) == (2, 1, Status.PLAYING)
    assert (snap.width, snap.bones_remaining, snap.seconds_remaining) == (lc.width, lc.bone_count, lc.time_budget_seconds)
    s.scheduler.advance(1000)
    assert s.snapshot.seconds_remaining == lc.time_budget_seconds - 1


def test_manual_advance_cancels_auto_advance():
    s = make_session()
    s.start(GameState(1, make_grid(".B", "..")))
    s.advance()
    assert s.snapshot.level == 1, "advance is ignored while still playing"
    s.move(RIGHT)
    s.advance()
    assert s.snapshot.level == 2
    s.scheduler.advance(s.config.level_advance_delay_ms)
    assert s.snapshot.level == 2, "pending auto-advance must not skip a level"


def test_win_at_max_level_is_terminal():
    cfg = GameConfig(max_level=2)
    celebration = RecordingCelebration()
    s = make_session(config=cfg, celebration=celebration)
    s.start(GameState(2, make_grid(".B", ".."), config=cfg, score=5))
    s.move(RIGHT)
    assert s.snapshot.status is Status.WON and s.snapshot.score == 6
    assert celebration.reasons == ["won"]
    assert s.scheduler.pending() == 0
    s.advance()
    s.scheduler.advance(60_000)
    assert s.snapshot.status is Status.WON and s.snapshot.level == 2


def test_lost_can_celebrate_when_configured():
    cfg = GameConfig(celebrate_on=("won", "lost"))
    celebration = RecordingCelebration()
    s = make_session(config=cfg, celebration=celebration)
    s.start(GameState(1, make_grid(".B", ".."), config=cfg, seconds_remaining=1))
    s.scheduler.advance(1000)
    assert s.snapshot.status is Status.LOST
    assert celebration.reasons == ["lost"]


def test_collaborator_failures_do_not_change_state(caplog):
    class Boom:
        def celebrate(self, reason):
            raise RuntimeError("no confetti")

    class BrokenBoard(Leaderboard):
        def submit(self, entry):
            raise IOError("disk full")

    s = make_session(celebration=Boom(), leaderboard=BrokenBoard())
    seen = []
    s.subscribe(lambda snap: seen.append(snap.status))
    s.subscribe(lambda snap: 1 / 0)
    with caplog.at_level(logging.ERROR):
        s.start(GameState(1, make_grid(".B", "..")))
        s.move(RIGHT)
        assert s.share() is None
    assert s.snapshot.status is Status.LEVEL_COMPLETE
    assert seen == [Status.PLAYING, Status.LEVEL_COMPLETE]
    assert "Celebration hook failed" in caplog.text


def test_intents_from_listeners_are_serialized():
    s = make_session()
    order = []

    def listener(snap):
        order.append(snap.player_pos)
        if snap.player_pos == (1, 0):
            s.move(RIGHT)  # queued behind the current transition
            order.append("queued")

    s.start(GameState(1, make_grid("...", "...", "..B")))
    s.subscribe(listener)
    s.move(RIGHT)
    assert order == [(1, 0), "queued", (2, 0)]


def test_share_submits_current_result():
    board = Leaderboard(5)
    s = make_session(identity=StaticIdentity("rex"), leaderboard=board)
    s.start(GameState(4, make_grid(".B", ".."), score=11))
    s.move(RIGHT)
    entry = s.share()
    assert (entry.display_name, entry.score, entry.level) == ("rex", 12, 4)
    assert board.entries() == (entry,)


def test_collect_every_bone_on_a_generated_level_then_advance():
    s = make_session(rng=random.Random(8))
    snap = s.start()
    assert snap.bones_total == 4
    for target in bone_positions(snap):
        if s.snapshot.grid[target[1]][target[0]] == Tile.BONE:
            walk_to(s, target)
    snap = s.snapshot
    assert snap.bones_remaining == 0 and snap.score == 4
    assert snap.status is Status.LEVEL_COMPLETE
    s.advance()
    snap = s.snapshot
    lc = level_config(2)
    assert snap.level == 2 and snap.score == 4
    assert (snap.width, snap.height, snap.bones_remaining) == (lc.width, lc.height, lc.bone_count)
