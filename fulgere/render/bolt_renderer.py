"""Glow and stroke passes for a bolt and its children."""
from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from fulgere.math.vector import Vector2
from fulgere.render.canvas import DrawingContext, LIGHTER
from fulgere.render.state import FrameStats
from fulgere.world.bolt import BoltTree
from fulgere.world.style import BoltStyle

MAX_STROKE_WIDTH = 12.0


def glow_offsets(points: Sequence[Vector2], radius: float) -> List[Tuple[float, float]]:
    """Perpendicular halo offset for every polyline point.

    Each point is pushed sideways by the distance to its neighbour (the next
    point, or the previous one for the last point), capped at ``radius``.
    """

    count = len(points)
    offsets: List[Tuple[float, float]] = []
    if count < 2:
        return [(0.0, 0.0)] * count
    for i, point in enumerate(points):
        if i == count - 1:
            dx = point.x - points[i - 1].x
            dy = point.y - points[i - 1].y
        else:
            dx = points[i + 1].x - point.x
            dy = points[i + 1].y - point.y
        distance = (dx * dx + dy * dy) ** 0.5
        if distance == 0.0:
            offsets.append((0.0, 0.0))
            continue
        reach = min(radius, distance)
        offsets.append((-dy / distance * reach, dx / distance * reach))
    return offsets


def _draw_glow(ctx: DrawingContext, points: Sequence[Vector2], style: BoltStyle) -> bool:
    offsets = glow_offsets(points, style.glow_radius)
    if not any(ox or oy for ox, oy in offsets):
        return False
    ctx.save()
    ctx.composite = LIGHTER
    ctx.fill_color = style.glow_color
    ctx.begin_path()
    first = points[0]
    ctx.move_to(first.x + offsets[0][0], first.y + offsets[0][1])
    for point, (ox, oy) in zip(points[1:], offsets[1:]):
        ctx.line_to(point.x + ox, point.y + oy)
    for point, (ox, oy) in zip(reversed(points), reversed(offsets)):
        ctx.line_to(point.x - ox, point.y - oy)
    ctx.close_path()
    ctx.fill()
    ctx.restore()
    return True


def draw_bolt(
    tree: BoltTree,
    index: int,
    ctx: DrawingContext,
    rng: Optional[random.Random] = None,
    style: Optional[BoltStyle] = None,
    stats: Optional[FrameStats] = None,
) -> None:
    """Draw the current polyline of ``index`` and then its children on top."""

    if rng is None:
        rng = random
    node = tree.node(index)
    style = style or node.style or BoltStyle()
    points = node.polyline

    if len(points) >= 2:
        if style.glow_radius > 0 and _draw_glow(ctx, points, style):
            if stats is not None:
                stats.glows_drawn += 1

        ctx.save()
        ctx.line_width = rng.uniform(style.line_width, MAX_STROKE_WIDTH)
        ctx.stroke_color = style.color
        ctx.begin_path()
        ctx.move_to(points[0].x, points[0].y)
        for point in points[1:]:
            ctx.line_to(point.x, point.y)
        ctx.stroke()
        ctx.restore()
        if stats is not None:
            stats.strokes_drawn += 1

    if node.children:
        child_style = style.child_style()
        for child in node.children:
            draw_bolt(tree, child, ctx, rng, child_style, stats)


__all__ = ["draw_bolt", "glow_offsets", "MAX_STROKE_WIDTH"]
