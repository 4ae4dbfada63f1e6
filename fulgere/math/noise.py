"""Seeded simplex noise used to jitter bolt polylines."""
from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

_F2 = 0.5 * (math.sqrt(3.0) - 1.0)
_G2 = (3.0 - math.sqrt(3.0)) / 6.0

_GRADIENTS: Tuple[Tuple[float, float], ...] = (
    (1.0, 1.0),
    (-1.0, 1.0),
    (1.0, -1.0),
    (-1.0, -1.0),
    (1.0, 0.0),
    (-1.0, 0.0),
    (1.0, 0.0),
    (-1.0, 0.0),
    (0.0, 1.0),
    (0.0, -1.0),
    (0.0, 1.0),
    (0.0, -1.0),
)

FRACTAL_OCTAVES = 6
FRACTAL_FALLOFF = 0.5


def _corner(gradient_index: int, x: float, y: float) -> float:
    t = 0.5 - x * x - y * y
    if t < 0.0:
        return 0.0
    gx, gy = _GRADIENTS[gradient_index]
    t *= t
    return t * t * (gx * x + gy * y)


class NoiseSource:
    """Smooth pseudo-random scalar field.

    The permutation table is fixed when the instance is built, so ``sample``
    is a pure function of its argument for the lifetime of the source.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        if rng is None:
            rng = random.Random(seed)
        table = list(range(256))
        rng.shuffle(table)
        self._perm: List[int] = table + table
        self._perm_mod12: List[int] = [value % 12 for value in self._perm]

    def sample2d(self, x: float, y: float) -> float:
        """2D simplex noise, nominally in [-1, 1]."""

        perm = self._perm
        perm_mod12 = self._perm_mod12
        skew = (x + y) * _F2
        i = math.floor(x + skew)
        j = math.floor(y + skew)
        unskew = (i + j) * _G2
        x0 = x - (i - unskew)
        y0 = y - (j - unskew)
        if x0 > y0:
            i1, j1 = 1, 0
        else:
            i1, j1 = 0, 1
        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        ii = i & 255
        jj = j & 255
        n0 = _corner(perm_mod12[ii + perm[jj]], x0, y0)
        n1 = _corner(perm_mod12[ii + i1 + perm[jj + j1]], x1, y1)
        n2 = _corner(perm_mod12[ii + 1 + perm[jj + 1]], x2, y2)
        return 70.0 * (n0 + n1 + n2)

    def sample(self, coordinate: float) -> float:
        return self.sample2d(coordinate, 0.0)

    def fractal_sample(
        self,
        coordinate: float,
        octaves: int = FRACTAL_OCTAVES,
        falloff: float = FRACTAL_FALLOFF,
    ) -> float:
        """Sum of remapped octaves, approximately in [0, 1].

        The octave weights are ``falloff ** k`` for ``k`` in ``1..octaves``
        so six octaves weigh 0.984375 in total. The sum is not clamped.
        """

        amplitude = 1.0
        frequency = 1.0
        total = 0.0
        for _ in range(octaves):
            amplitude *= falloff
            total += amplitude * (self.sample(coordinate * frequency) + 1.0) * 0.5
            frequency *= 2.0
        return total


def _octave_weight(octaves: int = FRACTAL_OCTAVES, falloff: float = FRACTAL_FALLOFF) -> float:
    """Total weight of ``fractal_sample`` for the given octave settings."""

    return sum(falloff ** (k + 1) for k in range(octaves))


__all__ = ["NoiseSource", "FRACTAL_OCTAVES", "FRACTAL_FALLOFF"]
