# src/bonehunt/ui/hud.py
from typing import List, Optional

from ..engine.state import GameSnapshot, Status
from ..tiles import GLYPHS


def hud_lines(snap: GameSnapshot) -> List[str]:
    """
    The four status lines shown above the grid:
    player, level, time left, bones collected this level out of the total.
    """
    return [
        f"Player: {snap.display_name}",
        f"Level: {snap.level}",
        f"Time Left: {snap.seconds_remaining}s",
        f"Bones Collected: {snap.bones_collected}/{snap.bones_total}",
    ]


def banner(snap: GameSnapshot) -> Optional[str]:
    if snap.status is Status.LOST:
        return "Time's up! Press T to retry this level, R to start over."
    if snap.status is Status.WON:
        return f"Congrats! All {snap.level} levels cleared with {snap.score} bones."
    if snap.status is Status.LEVEL_COMPLETE:
        return f"Mission Complete! Next up: level {snap.level + 1}"
    if snap.status is Status.SLOWED:
        return "Stuck in mud..."
    return None


def grid_text(snap: GameSnapshot, player_glyph: str = "@") -> List[str]:
    out = []
    for y, row in enumerate(snap.grid):
        chars = [player_glyph if (x, y) == snap.player_pos else GLYPHS[t] for x, t in enumerate(row)]
        out.append("".join(chars))
    return out
