"""Unit tests for Vector2D."""

import numpy as np
import pytest

from sca2d import Vector2D


def test_arithmetic():
    a, b = Vector2D(1, 2), Vector2D(3, -1)
    assert a + b == Vector2D(4, 1)
    assert a - b == Vector2D(-2, 3)
    assert a * 2 == 2 * a == Vector2D(2, 4)
    assert b / 2 == Vector2D(1.5, -0.5)
    assert -a == Vector2D(-1, -2)


def test_normalize():
    v = Vector2D(3, 4).normalize()
    assert v == Vector2D(0.6, 0.8)
    assert v.magnitude == pytest.approx(1.0)


def test_normalize_zero_and_non_finite():
    assert Vector2D(0, 0).normalize() == Vector2D(0, 0)
    assert Vector2D(float('inf'), 0).normalize() == Vector2D(0, 0)


def test_tiny_vectors_still_normalize():
    assert Vector2D(1e-12, 0).normalize() == Vector2D(1, 0)


def test_squared_distance():
    assert Vector2D(0, 0).distance_squared_to(Vector2D(3, 4)) == 25.0


def test_conversions():
    v = Vector2D.coerce((1.5, -2))
    assert v.to_tuple() == (1.5, -2.0)
    assert Vector2D.coerce(np.array([1.5, -2.0])) == v
    assert Vector2D.coerce([1.5, -2]) == v
    assert Vector2D.coerce(v) is v



def test_copy_is_independent():
    v = Vector2D(1, 1)
    c = v.copy()
    c.x = 5
    assert v.x == 1.0


def test_not_equal_to_other_types():
    assert Vector2D(1, 2) != (1, 2)
