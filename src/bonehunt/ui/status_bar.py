from typing import Optional, Tuple

from ..engine.state import GameSnapshot
from .hud import banner, hud_lines


def render_status_bar(
    screen, origin_xy: Tuple[int, int], width: int, line_h: int,
    snap: GameSnapshot, font=None,
) -> int:
    """
    Draw the HUD lines (and the status banner, if any) starting at origin_xy.
    Does not touch game state. Returns the y just below the last line drawn.
    """
    import pygame  # local import to avoid hard dep when not used
    ox, oy = origin_xy
    lines = hud_lines(snap)
    msg: Optional[str] = banner(snap)
    if msg:
        lines.append(msg)

    pygame.draw.rect(screen, (60, 40, 20), pygame.Rect(ox, oy, width, line_h * len(lines)))
    font = font or pygame.font.SysFont(None, max(12, int(line_h * 0.8)))

    y = oy
    for i, text in enumerate(lines):
        color = (255, 220, 120) if (msg and i == len(lines) - 1) else (240, 230, 210)
        img = font.render(text, True, color)
        screen.blit(img, (ox + line_h // 2, y + (line_h - img.get_height()) // 2))
        y += line_h
    return y
