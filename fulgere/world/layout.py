"""Radial placement of the root bolts."""
from __future__ import annotations

import math
from typing import List, Tuple

from fulgere.math.vector import Vector2

RADIUS_FRACTION = 1.0 / 3.0
MIN_ROOT_STEPS = 5
AUTO_STEP_LENGTH = 10.0


def radial_endpoints(count: int, width: float, height: float) -> List[Tuple[Vector2, Vector2]]:
    """Endpoints for ``count`` bolts forming a ring in the viewport.

    Bolt ``i`` joins the ring positions at angles ``i/count`` and
    ``(i+1)/count`` of a full turn. Odd bolts run the other way round so
    neighbours meet head to head and tail to tail.
    """

    if count <= 0:
        raise ValueError(f"Bolt count must be positive, got {count}")
    center_x = width * 0.5
    center_y = height * 0.5
    radius = width * RADIUS_FRACTION
    endpoints: List[Tuple[Vector2, Vector2]] = []
    for i in range(count):
        angle = i / count * 2.0 * math.pi
        next_angle = (i + 1) / count * 2.0 * math.pi
        first = Vector2(center_x + radius * math.cos(angle), center_y + radius * math.sin(angle))
        second = Vector2(center_x + radius * math.cos(next_angle), center_y + radius * math.sin(next_angle))
        if i % 2 == 0:
            endpoints.append((first, second))
        else:
            endpoints.append((second, first))
    return endpoints


def root_step_count(length: float, fixed_steps: int = MIN_ROOT_STEPS, auto_steps: bool = False) -> int:
    if auto_steps:
        steps = math.ceil(length / AUTO_STEP_LENGTH)
    else:
        steps = fixed_steps
    return max(MIN_ROOT_STEPS, int(steps))


__all__ = ["radial_endpoints", "root_step_count", "MIN_ROOT_STEPS"]
