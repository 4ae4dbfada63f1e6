import logging
import math
import random

import pygame
import pytest

from fulgere.engine.logger import DEFAULT_CHANNELS, LoggerConfig, StormLogger
from fulgere.engine.scene import SceneManager
from fulgere.engine.settings import StormSettings
from fulgere.world.layout import radial_endpoints, root_step_count
from fulgere.world.style import BoltStyle
from fulgere.ui.storm_scene import StormContext, StormScene

from fakes import RecordingContext


def _quiet_logger() -> StormLogger:
    channels = {name: False for name in DEFAULT_CHANNELS}
    return StormLogger(LoggerConfig(level=logging.CRITICAL, channels=channels))


def _settings(**overrides) -> StormSettings:
    values = dict(bolt_count=4, child_count=2, seed=1, style=BoltStyle())
    values.update(overrides)
    return StormSettings(**values)


def test_radial_endpoints_form_a_ring() -> None:
    endpoints = radial_endpoints(12, 900, 600)
    assert len(endpoints) == 12
    for start, end in endpoints:
        assert math.hypot(start.x - 450, start.y - 300) == pytest.approx(300.0)
        assert math.hypot(end.x - 450, end.y - 300) == pytest.approx(300.0)
    first_start, first_end = endpoints[0]
    assert first_start.as_tuple() == pytest.approx((750.0, 300.0))
    second_start, second_end = endpoints[1]
    # Odd bolts run backwards so neighbours share an endpoint.
    assert second_end.as_tuple() == pytest.approx(first_end.as_tuple())
    last_start, last_end = endpoints[-1]
    assert last_start.as_tuple() == pytest.approx(first_start.as_tuple())


def test_radial_endpoints_reject_empty_ring() -> None:
    with pytest.raises(ValueError):
        radial_endpoints(0, 100, 100)


def test_root_step_count_policy() -> None:
    assert root_step_count(400.0) == 5
    assert root_step_count(400.0, fixed_steps=8) == 8
    assert root_step_count(400.0, fixed_steps=2) == 5
    assert root_step_count(400.0, auto_steps=True) == 40
    assert root_step_count(12.0, auto_steps=True) == 5


def test_context_layout_places_roots_and_children() -> None:
    context = StormContext.build(_settings())
    context.layout(800, 600)
    assert len(context.roots) == 4
    endpoints = radial_endpoints(4, 800, 600)
    for root, (start, end) in zip(context.roots, endpoints):
        node = context.tree.node(root)
        assert node.start_point == start
        assert node.end_point == end
        assert node.step_count == 5
        assert context.tree.child_count(root) == 2

    children = [list(context.tree.node(root).children) for root in context.roots]
    context.layout(1024, 768)
    assert [context.tree.node(root).children for root in context.roots] == children


def test_context_frame_updates_then_draws_every_bolt() -> None:
    context = StormContext.build(_settings())
    context.layout(800, 600)
    context.advance(16.0)
    ctx = RecordingContext()
    context.draw(ctx)
    assert ctx.calls[0] == ("clear", (0, 0, 800, 600))
    assert len(ctx.of_kind("stroke")) == 12
    frame = context.end_frame()
    assert frame.bolts_updated == 12
    assert frame.frames == 1
    assert context.totals.frames == 1
    assert context.stats.bolts_updated == 0


def test_context_dispose_cancels_timers() -> None:
    context = StormContext.build(_settings())
    context.layout(800, 600)
    assert len(context.timers) == 8
    context.dispose()
    assert len(context.timers) == 0
    assert len(context.tree) == 0


def test_storm_scene_renders_to_surface() -> None:
    scene = StormScene(None)
    scene.on_enter(settings=_settings(), rng=random.Random(0), logger=_quiet_logger(), viewport=(320, 240))
    surface = pygame.Surface((320, 240))
    for _ in range(3):
        scene.update(1 / 60)
        scene.render(surface)
    lit = [
        surface.get_at((x, y))
        for x in range(0, 320, 4)
        for y in range(0, 240, 4)
        if tuple(surface.get_at((x, y)))[:3] != (0, 0, 0)
    ]
    assert lit
    assert scene.context.totals.frames == 3


def test_storm_scene_follows_surface_size() -> None:
    scene = StormScene(None)
    scene.on_enter(settings=_settings(), rng=random.Random(0), viewport=(320, 240))
    scene.update(1 / 60)
    scene.render(pygame.Surface((640, 480)))
    assert scene.context.viewport == (640, 480)
    root = scene.context.tree.node(scene.context.roots[0])
    assert root.start_point.as_tuple() == pytest.approx((320 + 640 / 3, 240.0))


def test_storm_scene_exit_disposes_context() -> None:
    scene = StormScene(None)
    scene.on_enter(settings=_settings(), rng=random.Random(0), viewport=(320, 240))
    timers = scene.context.timers
    scene.on_exit()
    assert scene.context is None
    assert len(timers) == 0


def test_scene_manager_activation_and_resize() -> None:
    manager = SceneManager()
    manager.register("storm", StormScene)
    manager.set_context(settings=_settings(), rng=random.Random(4))
    manager.activate("storm", viewport=(400, 300))
    scene = manager.active()
    assert manager.active_name == "storm"
    manager.resize(500, 400)
    assert scene.context.viewport == (500, 400)
    manager.shutdown()
    assert manager.active() is None
    with pytest.raises(KeyError):
        manager.activate("title")


def test_context_shares_its_scheduler_with_the_tree() -> None:
    context = StormContext.build(_settings(bolt_count=2))
    assert context.tree.timers is context.timers
    context.layout(800, 600)
    assert len(context.timers) == 4


def test_children_respan_while_the_scene_advances() -> None:
    context = StormContext.build(_settings(bolt_count=2))
    context.layout(800, 600)
    children = [child for root in context.roots for child in context.tree.node(root).children]
    spans = {child: set() for child in children}
    for _ in range(1000):
        context.advance(16.0)
        for child in children:
            node = context.tree.node(child)
            spans[child].add((node.start_step, node.end_step))
    assert all(len(seen) > 1 for seen in spans.values())
    assert len(context.timers) == 4
