# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import math

import pytest

from bezier_superpowers.arcs import EllipticalArc, circular_sweep, endpoint_to_center
from bezier_superpowers.geometry import Point, cubic_point


def test_endpoint_to_center() -> None:
    """A half circle between two points has its center in the middle."""
    arc = endpoint_to_center(Point(0, 0), 50, 50, 0, False, True, Point(100, 0))
    assert arc is not None
    assert arc.c.is_close(Point(50, 0))
    assert arc.dtheta == pytest.approx(math.pi)
    assert arc.start.is_close(Point(0, 0))
    assert arc.end.is_close(Point(100, 0))
    assert arc.point(arc.theta0 + arc.dtheta / 2).is_close(Point(50, -50))


def test_endpoint_to_center_flags() -> None:
    """Large-arc and sweep flags select one of four arcs."""
    p0, p1 = Point(0, 0), Point(50, 50)
    sweeps = {}
    for large_arc in (False, True):
        for sweep in (False, True):
            arc = endpoint_to_center(p0, 50, 50, 0, large_arc, sweep, p1)
            assert arc is not None
            assert arc.end.is_close(p1)
            sweeps[large_arc, sweep] = arc.dtheta

    assert sweeps[False, True] == pytest.approx(math.pi / 2)
    assert sweeps[False, False] == pytest.approx(-math.pi / 2)
    assert sweeps[True, True] == pytest.approx(3 * math.pi / 2)
    assert sweeps[True, False] == pytest.approx(-3 * math.pi / 2)


def test_endpoint_to_center_degenerate() -> None:
    assert endpoint_to_center(Point(1, 1), 5, 5, 0, False, False, Point(1, 1)) is None
    assert endpoint_to_center(Point(0, 0), 0, 5, 0, False, False, Point(1, 1)) is None


def test_endpoint_to_center_tiny_radii() -> None:
    """Radii too small to be squared in floating point degenerate like zero radii."""
    p0, p1 = Point(0, 0), Point(10, 0)
    assert endpoint_to_center(p0, 1e-200, 1e-200, 0, False, True, p1) is None
    assert endpoint_to_center(p0, 1e-160, 1e-160, 0, False, True, p1) is None
    assert endpoint_to_center(p0, 5, 1e-200, 30, True, False, p1) is None


def test_endpoint_to_center_scaled_radii() -> None:
    """Radii that cannot span the end points are scaled up."""
    arc = endpoint_to_center(Point(0, 0), 1, 1, 0, False, True, Point(100, 0))
    assert arc is not None
    assert arc.rx == pytest.approx(50)
    assert arc.ry == pytest.approx(50)


def test_to_cubics() -> None:
    """A full circle is split into four cubics that stay close to the circle."""
    arc = EllipticalArc(Point(0, 0), 10, 10, 0, 0, 2 * math.pi)
    pieces = arc.to_cubics()
    assert len(pieces) == 4

    start = arc.start
    for c1, c2, end in pieces:
        assert end.length == pytest.approx(10)
        assert cubic_point(0.5, start, c1, c2, end).length == pytest.approx(10, rel=1e-3)
        start = end
    assert start.is_close(arc.start)

    assert EllipticalArc(Point(0, 0), 10, 10, 0, 0, 0).to_cubics() == []


def test_circular_sweep() -> None:
    tau = 2 * math.pi
    assert circular_sweep(0, math.pi / 2, True) == pytest.approx(math.pi / 2)
    assert circular_sweep(0, math.pi / 2, False) == pytest.approx(-3 * math.pi / 2)
    assert circular_sweep(0, -math.pi / 2, True) == pytest.approx(3 * math.pi / 2)
    assert circular_sweep(0, tau, True) == pytest.approx(tau)
    assert circular_sweep(0, 3 * tau, True) == pytest.approx(tau)
    assert circular_sweep(1, 1, False) == 0
