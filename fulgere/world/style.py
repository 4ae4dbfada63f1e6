"""Per-frame visual parameters passed down the bolt tree."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

Color = Tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
SOFT_WHITE: Color = (255, 255, 255, 64)

CHILD_SPEED_FACTOR = 1.35
CHILD_LINE_WIDTH_FACTOR = 0.75


@dataclass(frozen=True)
class BoltStyle:
    """Visual parameters for one generation of bolts.

    Roots own a style; every child generation derives its own from the
    parent's on the way down, so nothing is stored on child nodes.
    """

    color: Color = WHITE
    speed: float = 0.025
    amplitude: float = 1.0
    line_width: float = 5.0
    glow_radius: float = 50.0
    glow_color: Color = SOFT_WHITE

    def child_style(self) -> "BoltStyle":
        return replace(
            self,
            speed=self.speed * CHILD_SPEED_FACTOR,
            line_width=self.line_width * CHILD_LINE_WIDTH_FACTOR,
        )


def coerce_color(value, default: Color) -> Color:
    """Accept RGB or RGBA sequences from settings, falling back to ``default``."""

    try:
        channels = [max(0, min(255, int(channel))) for channel in value]
    except (TypeError, ValueError):
        return default
    if len(channels) == 3:
        channels.append(255)
    if len(channels) != 4:
        return default
    return tuple(channels)  # type: ignore[return-value]


__all__ = ["BoltStyle", "Color", "coerce_color", "WHITE", "SOFT_WHITE"]
