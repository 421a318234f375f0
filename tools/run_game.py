# tools/run_game.py
# Pygame runner for the session engine.
# The loop only translates keys into intents, advances the session scheduler by
# the frame's elapsed milliseconds and draws the latest snapshot; all game
# rules live in bonehunt.engine.

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

import pygame

try:
    from bonehunt.config import config_from_env, load_config
    from bonehunt.engine.player import Direction
    from bonehunt.engine.session import SessionController
    from bonehunt.engine.state import Status
    from bonehunt.platform import RecordingCelebration, StaticIdentity
    from bonehunt.render.tileset import Tileset
    from bonehunt.ui.status_bar import render_status_bar
except Exception as e:  # pragma: no cover
    print("[run_game] Failed to import project modules:", e)
    print("Ensure you installed the package in editable mode: pip install -e .")
    raise

logger = logging.getLogger("run_game")

KEYMAP = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

HUD_LINES = 5


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="Bone Hunt runtime")
    parser.add_argument("--config", type=str, default=None, help="JSON file of GameConfig overrides")
    parser.add_argument("--name", type=str, default=None, help="display name (default: You)")
    parser.add_argument("--seed", type=int, default=None, help="seed level generation")
    parser.add_argument("--tile", type=int, default=48, help="tile size in pixels")
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config = load_config(args.config) if args.config else config_from_env()
    rng = random.Random(args.seed) if args.seed is not None else None

    session = SessionController(
        config=config,
        rng=rng,
        identity=StaticIdentity(args.name),
        celebration=RecordingCelebration(),
    )
    snap = session.start()

    if not pygame.get_init():
        pygame.init()
    if not pygame.font.get_init():
        pygame.font.init()

    tile = args.tile
    max_cells = config.max_size
    line_h = max(18, tile // 2)
    screen = pygame.display.set_mode((max_cells * tile, max_cells * tile + HUD_LINES * line_h))
    pygame.display.set_caption("Bone Hunt")
    clock = pygame.time.Clock()
    tileset = Tileset(tile)

    def draw() -> None:
        s = session.snapshot
        screen.fill((255, 237, 213))
        y0 = render_status_bar(screen, (0, 0), screen.get_width(), line_h, s)
        for y, row in enumerate(s.grid):
            for x, t in enumerate(row):
                screen.blit(tileset.for_tile(t), (x * tile, y0 + y * tile))
        px, py = s.player_pos
        screen.blit(tileset.player(), (px * tile, y0 + py * tile))
        pygame.display.flip()

    running = True
    clock.tick(args.fps)
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key in KEYMAP:
                    session.move(KEYMAP[event.key])
                elif event.key == pygame.K_t and session.snapshot.status is Status.LOST:
                    session.retry()
                elif event.key == pygame.K_r:
                    session.restart()
                elif event.key == pygame.K_n and session.snapshot.status is Status.LEVEL_COMPLETE:
                    session.advance()
                elif event.key == pygame.K_p:
                    entry = session.share()
                    if entry is not None:
                        logger.info("Shared %s: %d bones, level %d", entry.display_name, entry.score, entry.level)
                        for rank, e in enumerate(session.leaderboard.entries(), 1):
                            logger.info("  #%d %-16s %4d  (level %d)", rank, e.display_name, e.score, e.level)

        session.scheduler.advance(clock.get_time())

        if session.snapshot is not snap:
            snap = session.snapshot
            if snap.status.terminal:
                logger.info("%s with %d bones at level %d", snap.status.value.upper(), snap.score, snap.level)

        draw()
        clock.tick(args.fps)

    pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
