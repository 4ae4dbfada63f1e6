import math
import random

import pytest

from fulgere.math.vector import Vector2


def test_normalize_yields_unit_length() -> None:
    rng = random.Random(7)
    for _ in range(50):
        vector = Vector2(rng.uniform(-500, 500), rng.uniform(-500, 500))
        if vector.length() == 0.0:
            continue
        assert vector.normalize().length() == pytest.approx(1.0)


def test_normalize_zero_vector_is_fixed_point() -> None:
    vector = Vector2()
    result = vector.normalize()
    assert result is vector
    assert vector == (0.0, 0.0)


def test_distance_squared_matches_distance() -> None:
    rng = random.Random(3)
    for _ in range(50):
        a = Vector2(rng.uniform(-1e3, 1e3), rng.uniform(-1e3, 1e3))
        b = Vector2(rng.uniform(-1e3, 1e3), rng.uniform(-1e3, 1e3))
        assert a.distance_to_squared(b) == pytest.approx(a.distance_to(b) ** 2)


def test_mutating_operations_chain() -> None:
    vector = Vector2(1.0, 2.0)
    result = vector.add(Vector2(3.0, 4.0)).sub(Vector2(1.0, 1.0)).scale(2.0)
    assert result is vector
    assert vector == (6.0, 10.0)


def test_static_forms_return_new_vectors() -> None:
    a = Vector2(5.0, 1.0)
    b = Vector2(2.0, 3.0)
    total = Vector2.added(a, b)
    difference = Vector2.subtracted(a, b)
    assert total == (7.0, 4.0)
    assert difference == (3.0, -2.0)
    assert a == (5.0, 1.0)
    assert b == (2.0, 3.0)


def test_set_accepts_vector_or_components() -> None:
    vector = Vector2()
    vector.set(Vector2(4.0, -2.0))
    assert vector == (4.0, -2.0)
    vector.set(1.5, 2.5)
    assert vector == (1.5, 2.5)
    vector.set()
    assert vector == (0.0, 0.0)


def test_angle_and_clone() -> None:
    vector = Vector2(0.0, 3.0)
    assert vector.angle() == pytest.approx(math.pi / 2)
    copy = vector.clone()
    copy.scale(2.0)
    assert vector == (0.0, 3.0)
    assert copy == (0.0, 6.0)
