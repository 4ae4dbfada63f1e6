"""Scene that animates the ring of lightning bolts."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import pygame

from fulgere.engine.logger import ChannelLogger, StormLogger
from fulgere.engine.scene import Scene
from fulgere.engine.settings import StormSettings
from fulgere.engine.timers import TimerScheduler
from fulgere.math.noise import NoiseSource
from fulgere.render.bolt_renderer import draw_bolt
from fulgere.render.canvas import DrawingContext, PygameCanvas
from fulgere.render.state import FrameStats
from fulgere.world.bolt import BoltTree
from fulgere.world.layout import radial_endpoints, root_step_count


@dataclass
class StormContext:
    """Everything a frame needs, owned by the scene."""

    settings: StormSettings
    tree: BoltTree
    timers: TimerScheduler
    rng: random.Random
    roots: List[int] = field(default_factory=list)
    viewport: Tuple[int, int] = (0, 0)
    stats: FrameStats = field(default_factory=FrameStats)
    totals: FrameStats = field(default_factory=FrameStats)

    @classmethod
    def build(
        cls,
        settings: StormSettings,
        rng: Optional[random.Random] = None,
        logger: Optional[StormLogger] = None,
    ) -> "StormContext":
        if rng is None:
            rng = random.Random(settings.seed)
        timers = TimerScheduler(logger.channel("timers") if logger else None)
        tree = BoltTree(
            noise=NoiseSource(rng=random.Random(rng.random())),
            rng=rng,
            timers=timers,
            logger=logger.channel("bolts") if logger else None,
        )
        context = cls(settings=settings, tree=tree, timers=timers, rng=rng)
        for _ in range(settings.bolt_count):
            context.roots.append(tree.create_root(style=settings.style))
        return context

    def layout(self, width: int, height: int) -> None:
        """Re-place every root around the ring for a new viewport size."""

        self.viewport = (width, height)
        endpoints = radial_endpoints(len(self.roots), width, height)
        for root, (start, end) in zip(self.roots, endpoints):
            steps = root_step_count(
                start.distance_to(end),
                self.settings.root_steps,
                self.settings.auto_steps,
            )
            self.tree.place(root, start, end, steps)
            self.tree.set_child_count(root, self.settings.child_count)

    def advance(self, elapsed_ms: float) -> None:
        self.timers.advance(elapsed_ms)
        for root in self.roots:
            self.tree.update(root, stats=self.stats)

    def draw(self, ctx: DrawingContext) -> None:
        width, height = self.viewport
        ctx.clear_rect(0, 0, width, height)
        for root in self.roots:
            draw_bolt(self.tree, root, ctx, self.rng, stats=self.stats)
        self.stats.frames += 1

    def end_frame(self) -> FrameStats:
        frame = self.stats
        self.totals.accumulate(frame)
        self.stats = FrameStats()
        return frame

    def dispose(self) -> None:
        self.tree.dispose()
        self.roots.clear()
        self.timers.clear()


class StormScene(Scene):
    """Ring of root bolts redrawn every frame."""

    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.context: Optional[StormContext] = None
        self.canvas: Optional[PygameCanvas] = None
        self._log: Optional[ChannelLogger] = None
        self._render_log: Optional[ChannelLogger] = None

    def on_enter(self, **kwargs) -> None:
        settings: StormSettings = kwargs.get("settings") or StormSettings()
        logger: Optional[StormLogger] = kwargs.get("logger")
        rng: Optional[random.Random] = kwargs.get("rng")
        self._log = logger.channel("scene") if logger else None
        self._render_log = logger.channel("render") if logger else None
        self.context = StormContext.build(settings, rng=rng, logger=logger)
        viewport = kwargs.get("viewport")
        if viewport:
            self.resize(*viewport)
        if self._log:
            self._log.info(
                "Storm started with %d bolts, %d children each",
                settings.bolt_count,
                settings.child_count,
            )

    def on_exit(self) -> None:
        if self.context:
            self.context.dispose()
        self.context = None
        if self._log:
            self._log.info("Storm stopped")

    def resize(self, width: int, height: int) -> None:
        if not self.context or (width, height) == self.context.viewport:
            return
        self.context.layout(width, height)
        if self._log:
            self._log.info("Viewport resized to %dx%d", width, height)

    def update(self, dt: float) -> None:
        if self.context:
            self.context.advance(dt * 1000.0)

    def render(self, surface: pygame.Surface) -> None:
        if not self.context:
            return
        if self.canvas is None:
            self.canvas = PygameCanvas(surface, self.context.settings.background)
        elif self.canvas.surface is not surface:
            self.canvas.set_surface(surface)
        size = surface.get_size()
        if size != self.context.viewport:
            self.resize(*size)
        self.context.draw(self.canvas)
        frame = self.context.end_frame()
        interval = self.context.settings.stats_interval
        if interval and self._render_log and self.context.totals.frames % interval == 0:
            self._render_log.debug(
                "Frame %d: %d bolts, %.1f points/bolt, %d forced respans, %d timers pending",
                self.context.totals.frames,
                frame.bolts_updated,
                frame.average_points(),
                frame.respans_forced,
                len(self.context.timers),
            )


__all__ = ["StormContext", "StormScene"]
