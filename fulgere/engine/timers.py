"""One-shot delay scheduler driven by the frame loop."""
from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, List, Optional, Tuple

from fulgere.engine.logger import ChannelLogger


@dataclass
class _Task:
    key: Hashable
    due: float
    callback: Callable[[], None]
    cancelled: bool = field(default=False, repr=False)


class TimerScheduler:
    """Runs keyed one-shot callbacks once their delay has elapsed.

    Time only moves when ``advance`` is called, so every callback runs on the
    caller's thread between frames. Each key owns at most one pending task;
    scheduling a key again replaces the previous task.
    """

    def __init__(self, logger: Optional[ChannelLogger] = None) -> None:
        self._now = 0.0
        self._sequence = 0
        self._queue: List[Tuple[float, int, _Task]] = []
        self._pending: Dict[Hashable, _Task] = {}
        self._logger = logger

    @property
    def now(self) -> float:
        return self._now

    def schedule(self, key: Hashable, delay: float, callback: Callable[[], None]) -> None:
        self.cancel(key)
        task = _Task(key=key, due=self._now + max(0.0, delay), callback=callback)
        self._pending[key] = task
        self._sequence += 1
        heapq.heappush(self._queue, (task.due, self._sequence, task))

    def cancel(self, key: Hashable) -> bool:
        task = self._pending.pop(key, None)
        if task is None:
            return False
        task.cancelled = True
        return True

    def is_scheduled(self, key: Hashable) -> bool:
        return key in self._pending

    def due_in(self, key: Hashable) -> Optional[float]:
        task = self._pending.get(key)
        if task is None:
            return None
        return task.due - self._now

    def __len__(self) -> int:
        return len(self._pending)

    def advance(self, elapsed: float) -> int:
        """Move the clock forward and fire every task that became due."""

        self._now += max(0.0, elapsed)
        fired = 0
        while self._queue and self._queue[0][0] <= self._now:
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            del self._pending[task.key]
            task.callback()
            fired += 1
        if fired and self._logger:
            self._logger.debug("Fired %d timer(s) at %.1f ms", fired, self._now)
        return fired

    def clear(self) -> None:
        for task in self._pending.values():
            task.cancelled = True
        self._pending.clear()
        self._queue.clear()


__all__ = ["TimerScheduler"]
