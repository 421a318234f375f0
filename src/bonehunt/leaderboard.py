# src/bonehunt/leaderboard.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class ScoreEntry:
    display_name: str
    score: int
    level: int


class Leaderboard:
    """
    Top-N by score. Equal scores keep submission order (earlier entry ranks
    higher). Entries are only ever added; the ones that fall off the bottom
    are dropped.
    """

    def __init__(self, size: int = 5) -> None:
        if size < 1:
            raise ValueError("size must be >= 1")
        self.size = size
        self._entries: List[ScoreEntry] = []

    def submit(self, entry: ScoreEntry) -> bool:
        """Returns True if the entry made the board."""
        self._entries.append(entry)
        # sorted() is stable, so ties stay in submission order
        self._entries = sorted(self._entries, key=lambda e: -e.score)[: self.size]
        return any(e is entry for e in self._entries)

    def entries(self) -> Tuple[ScoreEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
