# src/bonehunt/engine/timing.py
# Millisecond scheduler for the session's timed events (tick, mud slow expiry,
# level-advance delay). The host loop owns the clock and calls advance() with
# elapsed wall-clock time, so nothing here ever sleeps.

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple


@dataclass
class TimerHandle:
    due_ms: int
    callback: Callable[[], None]
    label: str = ""
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> bool:
        """Returns True if this call stopped a pending callback."""
        if not self.active:
            return False
        self.cancelled = True
        return True


@dataclass
class Scheduler:
    now_ms: int = 0
    _heap: List[Tuple[int, int, TimerHandle]] = field(default_factory=list)
    _seq: "itertools.count[int]" = field(default_factory=itertools.count)

    def call_later(self, delay_ms: int, callback: Callable[[], None], label: str = "") -> TimerHandle:
        handle = TimerHandle(due_ms=self.now_ms + max(0, int(delay_ms)), callback=callback, label=label)
        # seq keeps equal due times in scheduling order
        heapq.heappush(self._heap, (handle.due_ms, next(self._seq), handle))
        return handle

    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if h.active)

    def next_due(self) -> Optional[int]:
        for due, _, h in sorted(self._heap):
            if h.active:
                return due
        return None

    def advance(self, elapsed_ms: int) -> int:
        """
        Move the clock forward, firing every callback that comes due, in due
        order. The clock is set to each callback's due time while it runs, so
        callbacks that schedule follow-ups are timed from the right instant.
        Returns the number of callbacks fired.
        """
        target = self.now_ms + max(0, int(elapsed_ms))
        fired = 0
        while self._heap and self._heap[0][0] <= target:
            due, _, handle = heapq.heappop(self._heap)
            if not handle.active:
                continue
            self.now_ms = due
            handle.fired = True
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired

    def cancel_all(self) -> None:
        for _, _, h in self._heap:
            h.cancel()
        self._heap.clear()
