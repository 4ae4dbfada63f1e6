"""Runtime settings loaded from settings.json."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fulgere.world.style import BoltStyle, Color, SOFT_WHITE, WHITE, coerce_color

DEFAULT_RESOLUTION = (1280, 720)
BLACK: Color = (0, 0, 0, 255)


@dataclass
class StormSettings:
    """Window, layout and style options for the storm scene."""

    resolution: Tuple[int, int] = DEFAULT_RESOLUTION
    max_fps: int = 60
    bolt_count: int = 12
    child_count: int = 2
    root_steps: int = 5
    auto_steps: bool = False
    background: Color = BLACK
    style: BoltStyle = field(default_factory=BoltStyle)
    seed: Optional[int] = None
    stats_interval: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StormSettings":
        defaults = cls()
        base = defaults.style
        resolution = data.get("resolution", defaults.resolution)
        try:
            width, height = (int(resolution[0]), int(resolution[1]))
        except (TypeError, ValueError, IndexError):
            width, height = defaults.resolution
        style = BoltStyle(
            color=coerce_color(data.get("color", WHITE), WHITE),
            speed=float(data.get("speed", base.speed)),
            amplitude=float(data.get("amplitude", base.amplitude)),
            line_width=float(data.get("lineWidth", base.line_width)),
            glow_radius=float(data.get("glowRadius", base.glow_radius)),
            glow_color=coerce_color(data.get("glowColor", SOFT_WHITE), SOFT_WHITE),
        )
        seed = data.get("seed")
        return cls(
            resolution=(width, height),
            max_fps=max(1, int(data.get("maxFps", defaults.max_fps))),
            bolt_count=max(1, int(data.get("boltCount", defaults.bolt_count))),
            child_count=max(0, int(data.get("childCount", defaults.child_count))),
            root_steps=max(1, int(data.get("rootSteps", defaults.root_steps))),
            auto_steps=bool(data.get("autoSteps", defaults.auto_steps)),
            background=coerce_color(data.get("background", BLACK), BLACK),
            style=style,
            seed=None if seed is None else int(seed),
            stats_interval=max(0, int(data.get("statsInterval", defaults.stats_interval))),
        )

    @classmethod
    def load(cls, path: Path) -> "StormSettings":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            return cls()
        if not isinstance(data, dict):
            return cls()
        try:
            return cls.from_dict(data)
        except (TypeError, ValueError):
            return cls()


__all__ = ["StormSettings", "DEFAULT_RESOLUTION"]
