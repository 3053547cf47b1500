# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import math

import pytest

from bezier_superpowers.geometry import (
    AffineTransform,
    Point,
    Rect,
    cubic_extrema_parameters,
    cubic_point,
    derivative_roots,
    polyline_length,
    quad_extrema_parameters,
    quad_point,
)


def test_point_eq() -> None:
    a, b = Point(1, 1), Point(2, 2)
    assert a == a
    assert not a == b
    assert not a == 1


def test_point_str() -> None:
    assert str(Point(1, 2)) == "(1, 2)"
    assert str(Point(1.5, -3.25)) == "(1.5, -3.25)"


def test_point_arithmetic() -> None:
    """Vector arithmetic on points."""
    a, b = Point(1, 2), Point(3, 5)
    assert a + b == Point(4, 7)
    assert b - a == Point(2, 3)
    assert a * 2 == Point(2, 4)
    assert b / 2 == Point(1.5, 2.5)
    assert -a == Point(-1, -2)
    assert tuple(a) == (1, 2)


def test_point_length() -> None:
    assert Point(3, 4).length == 5
    assert Point(0, 0).distance_to(Point(3, 4)) == 5
    assert Point(3, 4).normalized == Point(0.6, 0.8)
    assert Point.ZERO.normalized == Point.ZERO


def test_rect() -> None:
    """Rectangle extents and construction from points."""
    r = Rect.from_points([Point(1, 5), Point(-2, 3), Point(4, 4)])
    assert r == Rect(-2, 3, 6, 2)
    assert (r.min_x, r.min_y, r.max_x, r.max_y) == (-2, 3, 4, 5)
    assert r.origin == Point(-2, 3)
    assert not r.is_empty
    assert Rect.from_points([]) == Rect.ZERO
    assert Rect.ZERO.is_empty


def test_transform_apply() -> None:
    """Elementary transforms map points as expected."""
    p = Point(2, 1)
    assert AffineTransform.translation(1, -1).apply(p) == Point(3, 0)
    assert AffineTransform.scaling(2).apply(p) == Point(4, 2)
    assert AffineTransform.scaling(2, 3).apply(p) == Point(4, 3)
    assert AffineTransform.rotation(math.pi / 2).apply(p).is_close(Point(-1, 2))


def test_transform_concatenating() -> None:
    """The receiver of ``concatenating`` is applied first."""
    t = AffineTransform.scaling(2).concatenating(AffineTransform.translation(1, 0))
    assert t.apply(Point(1, 1)) == Point(3, 2)

    t = AffineTransform.translation(1, 0).concatenating(AffineTransform.scaling(2))
    assert t.apply(Point(1, 1)) == Point(4, 2)


def test_transform_classification() -> None:
    """Identity and translation-only detection."""
    assert AffineTransform.IDENTITY.is_identity
    assert not AffineTransform.IDENTITY.is_translation_only
    assert AffineTransform.translation(0, 0).is_identity
    assert AffineTransform.translation(5, 0).is_translation_only
    assert not AffineTransform.scaling(2).is_translation_only
    assert not AffineTransform(a=2, tx=1).is_translation_only


def test_bezier_points() -> None:
    """Bézier curves interpolate their end points."""
    p0, c, p1 = Point(0, 0), Point(50, 100), Point(100, 0)
    assert quad_point(0, p0, c, p1) == p0
    assert quad_point(1, p0, c, p1) == p1
    assert quad_point(0.5, p0, c, p1) == Point(50, 50)

    c1, c2 = Point(0, 100), Point(100, 100)
    assert cubic_point(0.5, p0, c1, c2, p1) == Point(50, 75)


def test_polyline_length() -> None:
    """Polyline approximation converges to the arc length of a semicircle."""

    def semicircle(t: float) -> Point:
        return Point(math.cos(math.pi * t), math.sin(math.pi * t))

    assert polyline_length(semicircle, 100) == pytest.approx(math.pi, rel=1e-3)
    assert polyline_length(semicircle, 100) < math.pi


def test_derivative_roots() -> None:
    """Only roots strictly inside the unit interval are reported."""
    assert derivative_roots([2, -1]) == [0.5]
    assert derivative_roots([1, -3, 2]) == []
    assert derivative_roots([4, -4, 0.75]) == [0.25, 0.75]
    assert derivative_roots([0, 0, 0]) == []
    assert derivative_roots([0, 0, 5]) == []


def test_extrema_parameters() -> None:
    """Axis-aligned extrema of symmetric curves are at their middle."""
    assert quad_extrema_parameters(Point(0, 0), Point(50, 100), Point(100, 0)) == [0.5]
    assert cubic_extrema_parameters(
        Point(0, 0), Point(0, 100), Point(100, 100), Point(100, 0)
    ) == [0.5]
    assert quad_extrema_parameters(Point(0, 0), Point(50, 50), Point(100, 100)) == []
