import random

import pytest

from fulgere.math.noise import NoiseSource, _octave_weight


def test_sample_is_deterministic_per_seed() -> None:
    first = NoiseSource(seed=11)
    second = NoiseSource(seed=11)
    coordinates = [i * 0.173 - 4.0 for i in range(60)]
    assert [first.sample(c) for c in coordinates] == [second.sample(c) for c in coordinates]
    assert [first.sample(c) for c in coordinates] == [first.sample(c) for c in coordinates]


def test_different_seeds_give_different_fields() -> None:
    first = NoiseSource(seed=1)
    second = NoiseSource(seed=2)
    coordinates = [i * 0.37 + 0.11 for i in range(40)]
    assert [first.sample(c) for c in coordinates] != [second.sample(c) for c in coordinates]


def test_sample_range() -> None:
    noise = NoiseSource(seed=5)
    rng = random.Random(5)
    for _ in range(2000):
        value = noise.sample(rng.uniform(-300.0, 300.0))
        assert -1.0 <= value <= 1.0


def test_sample_is_smooth() -> None:
    noise = NoiseSource(seed=9)
    previous = noise.sample(0.0)
    for i in range(1, 500):
        current = noise.sample(i * 0.001)
        assert abs(current - previous) < 0.05
        previous = current


def test_octave_weight_for_default_settings() -> None:
    assert _octave_weight() == pytest.approx(0.984375)


def test_fractal_sample_stays_near_unit_range() -> None:
    noise = NoiseSource(seed=21)
    rng = random.Random(21)
    values = [noise.fractal_sample(rng.uniform(-50.0, 50.0)) for _ in range(1000)]
    assert min(values) >= 0.0
    assert max(values) <= _octave_weight() + 1e-9
    assert any(value != pytest.approx(values[0]) for value in values)


def test_fractal_sample_of_zero_field_is_half_weight() -> None:
    noise = NoiseSource(seed=4)
    # Simplex noise is exactly zero at the lattice origin for every octave.
    assert noise.fractal_sample(0.0) == pytest.approx(_octave_weight() * 0.5)
