"""Per-refresh frame loop."""
from __future__ import annotations

import time
from typing import Callable


class FrameLoop:
    """Calls the frame callback once per display refresh until stopped.

    Every frame runs to completion before the next one starts. The elapsed
    wall time is handed to ``frame`` so the host can advance its timers.
    """

    def __init__(
        self,
        frame: Callable[[float], None],
        process_events: Callable[[], None],
        max_frame_time: float = 0.25,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.frame = frame
        self.process_events = process_events
        self.max_frame_time = max_frame_time
        self._clock = clock
        self._running = False
        self.frames = 0

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        self._running = True
        last_time = self._clock()
        while self._running:
            self.process_events()
            if not self._running:
                break
            now = self._clock()
            frame_time = now - last_time
            last_time = now
            if frame_time > self.max_frame_time:
                frame_time = self.max_frame_time
            self.frame(frame_time)
            self.frames += 1


__all__ = ["FrameLoop"]
