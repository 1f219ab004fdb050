"""
Tick Scheduler
===============
Timer queue for delayed events, driven by a monotonic clock.

Timers are never cancelled individually. The game loop tags each tick
with its run generation and ignores stale ones, so a restart simply
lets the old timers fire into the void.
"""

import heapq
import itertools
import time
from typing import Any, Callable, List, Optional, Tuple


class Scheduler:
    """Heap of (due_time, sequence, event) entries."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._heap: List[Tuple[float, int, Any]] = []
        self._counter = itertools.count()  # FIFO for equal due times

    def __len__(self) -> int:
        return len(self._heap)

    def now(self) -> float:
        return self._clock()

    def schedule(self, delay: float, event: Any) -> float:
        """Queue event to fire delay seconds from now. Returns the due time."""
        due = self._clock() + max(delay, 0.0)
        heapq.heappush(self._heap, (due, next(self._counter), event))
        return due

    def pop_due(self) -> List[Any]:
        """Remove and return every event that is due, earliest first."""
        now = self._clock()
        due = []
        while self._heap and self._heap[0][0] <= now:
            _, _, event = heapq.heappop(self._heap)
            due.append(event)
        return due

    def time_until_next(self) -> Optional[float]:
        """Seconds until the earliest timer fires, None when idle."""
        if not self._heap:
            return None
        return max(self._heap[0][0] - self._clock(), 0.0)

    def clear(self):
        self._heap.clear()
