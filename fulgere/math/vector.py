"""Small mutable 2D vector used by the bolt geometry."""
from __future__ import annotations

import math
from typing import Iterator, Tuple, Union


class Vector2:
    """Mutable 2D point/vector.

    Instance operations modify the receiver and return it so calls can be
    chained. ``added`` and ``subtracted`` build new vectors instead.
    """

    __slots__ = ("x", "y")

    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = float(x or 0.0)
        self.y = float(y or 0.0)

    @staticmethod
    def added(a: "Vector2", b: "Vector2") -> "Vector2":
        return Vector2(a.x + b.x, a.y + b.y)

    @staticmethod
    def subtracted(a: "Vector2", b: "Vector2") -> "Vector2":
        return Vector2(a.x - b.x, a.y - b.y)

    def set(self, x: Union["Vector2", float] = 0.0, y: float = 0.0) -> "Vector2":
        if isinstance(x, Vector2):
            x, y = x.x, x.y
        self.x = float(x or 0.0)
        self.y = float(y or 0.0)
        return self

    def add(self, other: "Vector2") -> "Vector2":
        self.x += other.x
        self.y += other.y
        return self

    def sub(self, other: "Vector2") -> "Vector2":
        self.x -= other.x
        self.y -= other.y
        return self

    def scale(self, scalar: float) -> "Vector2":
        self.x *= scalar
        self.y *= scalar
        return self

    def length(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> "Vector2":
        length = self.length()
        if length:
            self.x /= length
            self.y /= length
        return self

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def distance_to(self, other: "Vector2") -> float:
        return math.sqrt(self.distance_to_squared(other))

    def distance_to_squared(self, other: "Vector2") -> float:
        dx = other.x - self.x
        dy = other.y - self.y
        return dx * dx + dy * dy

    def clone(self) -> "Vector2":
        return Vector2(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Vector2):
            return self.x == other.x and self.y == other.y
        if isinstance(other, tuple) and len(other) == 2:
            return (self.x, self.y) == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Vector2({self.x:g}, {self.y:g})"


__all__ = ["Vector2"]
