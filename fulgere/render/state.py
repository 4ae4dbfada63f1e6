"""Per-frame counters for the bolt update and draw passes."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FrameStats:
    """Aggregated instrumentation for one or more frames."""

    frames: int = 0
    bolts_updated: int = 0
    points_built: int = 0
    respans_forced: int = 0
    strokes_drawn: int = 0
    glows_drawn: int = 0

    def accumulate(self, other: "FrameStats") -> None:
        self.frames += other.frames
        self.bolts_updated += other.bolts_updated
        self.points_built += other.points_built
        self.respans_forced += other.respans_forced
        self.strokes_drawn += other.strokes_drawn
        self.glows_drawn += other.glows_drawn

    def reset(self) -> None:
        self.frames = 0
        self.bolts_updated = 0
        self.points_built = 0
        self.respans_forced = 0
        self.strokes_drawn = 0
        self.glows_drawn = 0

    def average_points(self) -> float:
        if self.bolts_updated <= 0:
            return 0.0
        return self.points_built / max(1, self.bolts_updated)


__all__ = ["FrameStats"]
