"""Recursive lightning bolt geometry.

Bolts live in an arena keyed by integer index. A child stores the index of
its parent and the span ``start_step..end_step`` of the parent's polyline it
follows. Every frame the tree is walked top-down: each bolt rebuilds its
polyline from its endpoints and the noise field, then its children copy
their endpoints out of that fresh polyline. Children re-pick their span on
their own timers, independently of the frame rate.
"""
from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from fulgere.engine.logger import ChannelLogger
from fulgere.engine.timers import TimerScheduler
from fulgere.math.noise import NoiseSource
from fulgere.math.vector import Vector2
from fulgere.render.state import FrameStats
from fulgere.world.style import BoltStyle

DEFAULT_STEPS = 45
RESPAN_INTERVAL_MS = 1500.0
MAX_JITTER_WIDTH = 750.0
CHILD_JITTER_SCALE = 1.5
NOISE_SPACING = 60.0
PHASE_STEP_FLOOR = 0.2
MIN_SPAN = 2


def _respan_key(index: int) -> Tuple[str, int]:
    return ("respan", index)


@dataclass
class BoltNode:
    """A single bolt in the arena."""

    index: int
    start_point: Vector2 = field(default_factory=Vector2)
    end_point: Vector2 = field(default_factory=Vector2)
    step_count: int = DEFAULT_STEPS
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    start_step: int = 0
    end_step: int = 0
    phase: float = 0.0
    polyline: List[Vector2] = field(default_factory=list, repr=False)
    style: Optional[BoltStyle] = None
    noise: Optional[NoiseSource] = field(default=None, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def length(self) -> float:
        return self.start_point.distance_to(self.end_point)


class BoltTree:
    """Owns every bolt of a scene and drives their update and re-span."""

    def __init__(
        self,
        noise: Optional[NoiseSource] = None,
        rng: Optional[random.Random] = None,
        timers: Optional[TimerScheduler] = None,
        logger: Optional[ChannelLogger] = None,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        if noise is None:
            noise = NoiseSource(rng=random.Random(self._rng.random()))
        self.noise = noise
        self.timers = timers if timers is not None else TimerScheduler()
        self._logger = logger
        self._nodes: Dict[int, BoltNode] = {}
        self._roots: List[int] = []
        self._next_index = 0

    # ------------------------------------------------------------------
    # Arena access
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, index: object) -> bool:
        return index in self._nodes

    def node(self, index: int) -> BoltNode:
        try:
            return self._nodes[index]
        except KeyError:
            raise KeyError(f"Bolt {index} is not part of this tree") from None

    def roots(self) -> List[int]:
        return list(self._roots)

    def descendants(self, index: int) -> Iterator[int]:
        """Yield every index below ``index``, depth first."""

        stack = list(reversed(self.node(index).children))
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self._nodes[current].children))

    def length(self, index: int) -> float:
        return self.node(index).length()

    def child_count(self, index: int) -> int:
        return len(self.node(index).children)

    def _allocate(self, **kwargs) -> BoltNode:
        index = self._next_index
        self._next_index += 1
        node = BoltNode(index=index, noise=self.noise, **kwargs)
        self._nodes[index] = node
        return node

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    def create_root(
        self,
        start: Optional[Vector2] = None,
        end: Optional[Vector2] = None,
        step_count: int = DEFAULT_STEPS,
        style: Optional[BoltStyle] = None,
    ) -> int:
        node = self._allocate(
            start_point=start.clone() if start is not None else Vector2(),
            end_point=end.clone() if end is not None else Vector2(),
            step_count=max(1, int(step_count)),
            style=style or BoltStyle(),
        )
        self._roots.append(node.index)
        return node.index

    def place(
        self,
        index: int,
        start: Vector2,
        end: Vector2,
        step_count: Optional[int] = None,
    ) -> None:
        """Move a root bolt's endpoints, optionally changing its resolution."""

        node = self.node(index)
        node.start_point.set(start)
        node.end_point.set(end)
        if step_count is not None:
            node.step_count = max(1, int(step_count))

    def set_child_count(self, index: int, count: int) -> None:
        if count < 0:
            raise ValueError(f"Child count must be non-negative, got {count}")
        node = self.node(index)
        current = len(node.children)
        if current == count:
            return
        if current > count:
            removed = node.children[count:]
            del node.children[count:]
            for child in removed:
                self._dispose_subtree(child)
        else:
            for _ in range(current, count):
                node.children.append(self._attach_child(node))
        if self._logger:
            self._logger.debug("Bolt %d children %d -> %d", index, current, count)

    def _attach_child(self, parent: BoltNode) -> int:
        child = self._allocate(parent=parent.index)
        self.respan(child.index)
        self._arm_respan(child.index)
        return child.index

    # ------------------------------------------------------------------
    # Re-span
    # ------------------------------------------------------------------
    def respan(self, index: int) -> None:
        """Pick a new span of the parent polyline for a child bolt."""

        node = self.node(index)
        if node.parent is None:
            return
        parent_steps = self._nodes[node.parent].step_count
        if parent_steps < MIN_SPAN:
            node.start_step, node.end_step = 0, parent_steps
        else:
            start = self._rng.randint(0, parent_steps - MIN_SPAN)
            node.start_step = start
            node.end_step = start + self._rng.randint(0, parent_steps - start - MIN_SPAN) + MIN_SPAN
        node.step_count = max(1, node.end_step - node.start_step)

    def _arm_respan(self, index: int) -> None:
        delay = self._rng.random() * RESPAN_INTERVAL_MS
        self.timers.schedule(_respan_key(index), delay, lambda: self._on_respan_timer(index))

    def _on_respan_timer(self, index: int) -> None:
        if index not in self._nodes:
            return
        self.respan(index)
        self._arm_respan(index)

    def is_respan_armed(self, index: int) -> bool:
        return self.timers.is_scheduled(_respan_key(index))

    # ------------------------------------------------------------------
    # Per-frame geometry
    # ------------------------------------------------------------------
    def update(
        self,
        index: int,
        style: Optional[BoltStyle] = None,
        stats: Optional[FrameStats] = None,
    ) -> None:
        """Rebuild the polyline of ``index`` and then of all its descendants."""

        node = self.node(index)
        style = style or node.style or BoltStyle()
        start_point = node.start_point
        end_point = node.end_point

        if node.parent is not None:
            parent = self._nodes[node.parent]
            if node.end_step > parent.step_count:
                self.respan(index)
                if stats is not None:
                    stats.respans_forced += 1
            if len(parent.polyline) > node.end_step:
                start_point.set(parent.polyline[node.start_step])
                end_point.set(parent.polyline[node.end_step])

        steps = max(1, node.step_count)
        length = start_point.distance_to(end_point)
        direction = Vector2.subtracted(end_point, start_point).normalize().scale(length / steps)
        angle = direction.angle()
        sin_angle = math.sin(angle)
        cos_angle = math.cos(angle)

        node.phase += self._rng.uniform(style.speed * PHASE_STEP_FLOOR, style.speed)
        phase = node.phase
        spread = length * CHILD_JITTER_SCALE if node.parent is not None else length
        jitter_width = min(MAX_JITTER_WIDTH, spread * style.amplitude)
        noise = node.noise

        points: List[Vector2] = []
        for i in range(steps + 1):
            offset = 0.0
            if jitter_width and noise is not None:
                n = i / NOISE_SPACING
                ahead = jitter_width * noise.fractal_sample(n - phase) * 0.5
                behind = jitter_width * noise.fractal_sample(n + phase) * 0.5
                offset = (ahead - behind) * math.sin(math.pi * i / steps)
            points.append(
                Vector2(
                    start_point.x + direction.x * i + sin_angle * offset,
                    start_point.y + direction.y * i - cos_angle * offset,
                )
            )
        # The envelope vanishes at both ends; pin them so rounding never drifts.
        points[0] = start_point.clone()
        points[-1] = end_point.clone()
        node.polyline = points

        if stats is not None:
            stats.bolts_updated += 1
            stats.points_built += len(points)

        if node.children:
            child_style = style.child_style()
            for child in node.children:
                self.update(child, child_style, stats)

    def update_all(self, stats: Optional[FrameStats] = None) -> None:
        for root in self._roots:
            self.update(root, stats=stats)

    # ------------------------------------------------------------------
    # Disposal
    # ------------------------------------------------------------------
    def remove(self, index: int) -> None:
        """Detach ``index`` from its parent and dispose its whole subtree."""

        node = self.node(index)
        if node.parent is None:
            self._roots.remove(index)
        else:
            parent = self._nodes.get(node.parent)
            if parent is not None and index in parent.children:
                parent.children.remove(index)
        self._dispose_subtree(index)

    def _dispose_subtree(self, index: int) -> None:
        node = self._nodes.pop(index, None)
        if node is None:
            return
        self.timers.cancel(_respan_key(index))
        node.noise = None
        children, node.children = node.children, []
        for child in children:
            self._dispose_subtree(child)

    def dispose(self) -> None:
        for root in list(self._roots):
            self.remove(root)
        if self._logger:
            self._logger.debug("Bolt tree disposed")


__all__ = [
    "BoltNode",
    "BoltTree",
    "DEFAULT_STEPS",
    "MAX_JITTER_WIDTH",
    "RESPAN_INTERVAL_MS",
]
