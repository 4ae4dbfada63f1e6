"""2D drawing context on top of a pygame surface."""
from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

import pygame

from fulgere.world.style import Color, WHITE

SOURCE_OVER = "source-over"
LIGHTER = "lighter"

Point = Tuple[float, float]


class DrawingContext(Protocol):
    """Path-based drawing surface the bolt renderer draws through."""

    line_width: float
    stroke_color: Color
    fill_color: Color
    composite: str

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        ...

    def save(self) -> None:
        ...

    def restore(self) -> None:
        ...

    def begin_path(self) -> None:
        ...

    def move_to(self, x: float, y: float) -> None:
        ...

    def line_to(self, x: float, y: float) -> None:
        ...

    def close_path(self) -> None:
        ...

    def stroke(self) -> None:
        ...

    def fill(self) -> None:
        ...


def _premultiplied(color: Color) -> Tuple[int, int, int]:
    alpha = color[3] / 255.0
    return (int(color[0] * alpha), int(color[1] * alpha), int(color[2] * alpha))


class PygameCanvas:
    """``DrawingContext`` backed by a ``pygame.Surface``.

    Additive fills and translucent strokes are rasterised onto a shared
    ``SRCALPHA`` overlay. Only the bounding box of the current path is
    cleared and blitted onto the target surface.
    """

    def __init__(self, surface: pygame.Surface, background: Color = (0, 0, 0, 255)) -> None:
        self.surface = surface
        self.background = background
        self.line_width = 1.0
        self.stroke_color: Color = WHITE
        self.fill_color: Color = WHITE
        self.composite = SOURCE_OVER
        self._stack: List[Tuple[float, Color, Color, str]] = []
        self._subpaths: List[List[Point]] = []
        self._overlay: Optional[pygame.Surface] = None

    def set_surface(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self._overlay = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.surface.get_size()

    def _dirty_rect(self, paths: List[List[Point]], pad: float) -> Optional[pygame.Rect]:
        """Bounding box of ``paths`` grown by ``pad``, clipped to the surface."""

        xs = [x for path in paths for x, _ in path]
        ys = [y for path in paths for _, y in path]
        left = int(min(xs) - pad) - 1
        top = int(min(ys) - pad) - 1
        right = int(max(xs) + pad) + 2
        bottom = int(max(ys) + pad) + 2
        rect = pygame.Rect(left, top, right - left, bottom - top).clip(self.surface.get_rect())
        if rect.width <= 0 or rect.height <= 0:
            return None
        return rect

    def _overlay_surface(self, rect: pygame.Rect) -> pygame.Surface:
        size = self.surface.get_size()
        if self._overlay is None or self._overlay.get_size() != size:
            self._overlay = pygame.Surface(size, pygame.SRCALPHA)
        self._overlay.fill((0, 0, 0, 0), rect)
        return self._overlay

    def _composite(self, rect: pygame.Rect) -> None:
        flags = pygame.BLEND_ADD if self.composite == LIGHTER else 0
        self.surface.blit(self._overlay, rect.topleft, area=rect, special_flags=flags)

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        self.surface.fill(self.background, pygame.Rect(int(x), int(y), int(width), int(height)))

    def save(self) -> None:
        self._stack.append((self.line_width, self.stroke_color, self.fill_color, self.composite))

    def restore(self) -> None:
        if not self._stack:
            return
        self.line_width, self.stroke_color, self.fill_color, self.composite = self._stack.pop()

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(x, y)
            return
        self._subpaths[-1].append((x, y))

    def close_path(self) -> None:
        if self._subpaths and len(self._subpaths[-1]) > 1:
            self._subpaths[-1].append(self._subpaths[-1][0])

    def stroke(self) -> None:
        paths = [path for path in self._subpaths if len(path) >= 2]
        if not paths:
            return
        width = max(1, int(round(self.line_width)))
        color = self.stroke_color
        if self.composite != LIGHTER and color[3] >= 255:
            for path in paths:
                pygame.draw.lines(self.surface, color, False, path, width)
            return
        rect = self._dirty_rect(paths, width * 0.5)
        if rect is None:
            return
        overlay = self._overlay_surface(rect)
        if self.composite == LIGHTER:
            color = _premultiplied(color)
        for path in paths:
            pygame.draw.lines(overlay, color, False, path, width)
        self._composite(rect)

    def fill(self) -> None:
        paths = [path for path in self._subpaths if len(path) >= 3]
        if not paths:
            return
        color = self.fill_color
        if self.composite != LIGHTER and color[3] >= 255:
            for path in paths:
                pygame.draw.polygon(self.surface, color, path)
            return
        rect = self._dirty_rect(paths, 0.0)
        if rect is None:
            return
        overlay = self._overlay_surface(rect)
        if self.composite == LIGHTER:
            color = _premultiplied(color)
        for path in paths:
            pygame.draw.polygon(overlay, color, path)
        self._composite(rect)


__all__ = ["DrawingContext", "PygameCanvas", "SOURCE_OVER", "LIGHTER"]
