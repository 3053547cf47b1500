# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Measured segments of a path.

A segment is the drawable piece between two consecutive current points of a
path: a line, a quadratic or a cubic Bézier curve. Segments know their
length and can be evaluated at a curve parameter :math:`t \\in [0, 1]`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from typing import final, override

from .elements import ClosePath, CurveTo, LineTo, MoveTo, PathElement, QuadCurveTo
from .geometry import (
    Point,
    cubic_derivative,
    cubic_extrema_parameters,
    cubic_point,
    linear_point,
    polyline_length,
    quad_derivative,
    quad_extrema_parameters,
    quad_point,
)


class Segment:
    """
    Base class of measured segments.

    :ivar start: Start point.
    :ivar end: End point.
    :ivar controls: Control points between ``start`` and ``end``.
    :ivar length: Measured length.
    :ivar length_range: Interval of path-length fractions covered by this
                        segment, assigned by the owning path.
    :ivar lookup_table: Sample points used for closest-point queries,
                        assigned by the owning path.
    """

    def __init__(
        self, start: Point, end: Point, controls: Sequence[Point], samples: int
    ) -> None:
        self.start: Point = start
        self.end: Point = end
        self.controls: tuple[Point, ...] = tuple(controls)
        self.length_range: tuple[float, float] | None = None
        self.lookup_table: list[Point] | None = None
        self.length: float = self._measure(samples)

    def _measure(self, samples: int) -> float:
        return polyline_length(self.point, samples)

    def point(self, t: float) -> Point:
        """Point at curve parameter ``t``."""
        raise NotImplementedError

    def derivative(self, t: float) -> Point:
        """First derivative with respect to the curve parameter ``t``."""
        raise NotImplementedError

    def extrema_parameters(self) -> list[float]:
        """Curve parameters of axis-aligned extrema inside the segment."""
        return []

    def slope(self, t: float) -> float:
        """
        Slope :math:`dy/dx` at ``t`` in the segment's own coordinates.

        Vertical tangents give :math:`±∞`, a vanishing derivative gives NaN.
        """
        d = self.derivative(t)
        if d.x == 0:
            return math.copysign(math.inf, d.y) if d.y != 0 else math.nan
        return d.y / d.x

    def tangent_angle(self, t: float) -> float:
        """Angle of the derivative at ``t`` against the positive x axis."""
        d = self.derivative(t)
        return math.atan2(d.y, d.x)

    def extreme_points(self) -> list[Point]:
        """End points plus the points at :meth:`extrema_parameters`."""
        return [self.start, self.end, *(self.point(t) for t in self.extrema_parameters())]

    def translated(self, dx: float, dy: float) -> Segment:
        """
        Return a copy shifted by ``(dx, dy)``.

        Length and length range carry over, the lookup table is shifted.
        """
        offset = Point(dx, dy)
        clone = object.__new__(self.__class__)
        clone.start = self.start + offset
        clone.end = self.end + offset
        clone.controls = tuple(p + offset for p in self.controls)
        clone.length = self.length
        clone.length_range = self.length_range
        clone.lookup_table = (
            [p + offset for p in self.lookup_table]
            if self.lookup_table is not None
            else None
        )
        return clone

    @override
    def __repr__(self) -> str:
        points = ", ".join(str(p) for p in (self.start, *self.controls, self.end))
        return f"{self.__class__.__name__}({points}, length={self.length:g})"


@final
class LineSegment(Segment):
    r"""Straight segment :math:`L(t) = s + (e - s)\,t`."""

    def __init__(self, start: Point, end: Point, samples: int = 0) -> None:
        super().__init__(start, end, (), samples)

    @override
    def _measure(self, samples: int) -> float:
        return self.start.distance_to(self.end)

    @override
    def point(self, t: float) -> Point:
        return linear_point(t, self.start, self.end)

    @override
    def derivative(self, t: float) -> Point:
        return self.end - self.start


@final
class QuadSegment(Segment):
    """Quadratic Bézier segment with a single control point."""

    def __init__(self, start: Point, control: Point, end: Point, samples: int) -> None:
        super().__init__(start, end, (control,), samples)

    @override
    def point(self, t: float) -> Point:
        return quad_point(t, self.start, self.controls[0], self.end)

    @override
    def derivative(self, t: float) -> Point:
        return quad_derivative(t, self.start, self.controls[0], self.end)

    @override
    def extrema_parameters(self) -> list[float]:
        return quad_extrema_parameters(self.start, self.controls[0], self.end)


@final
class CubicSegment(Segment):
    """Cubic Bézier segment with two control points."""

    def __init__(
        self, start: Point, control1: Point, control2: Point, end: Point, samples: int
    ) -> None:
        super().__init__(start, end, (control1, control2), samples)

    @override
    def point(self, t: float) -> Point:
        c1, c2 = self.controls
        return cubic_point(t, self.start, c1, c2, self.end)

    @override
    def derivative(self, t: float) -> Point:
        c1, c2 = self.controls
        return cubic_derivative(t, self.start, c1, c2, self.end)

    @override
    def extrema_parameters(self) -> list[float]:
        c1, c2 = self.controls
        return cubic_extrema_parameters(self.start, c1, c2, self.end)


def extract_segments(elements: Iterable[PathElement], samples: int) -> list[Segment]:
    """
    Convert path elements into measured segments.

    Moves only change the current point, a close produces a line back to the
    start of the subpath unless the current point is already there.

    :param elements: Path elements in drawing order.
    :param samples: Polyline samples per curved segment.
    """
    segments: list[Segment] = []
    current = Point.ZERO
    subpath_start = Point.ZERO

    for element in elements:
        match element:
            case MoveTo():
                current = subpath_start = element.points[0]
            case LineTo():
                end = element.points[0]
                segments.append(LineSegment(current, end))
                current = end
            case QuadCurveTo():
                control, end = element.points
                segments.append(QuadSegment(current, control, end, samples))
                current = end
            case CurveTo():
                control1, control2, end = element.points
                segments.append(CubicSegment(current, control1, control2, end, samples))
                current = end
            case ClosePath():
                if current != subpath_start:
                    segments.append(LineSegment(current, subpath_start))
                current = subpath_start
            case _:
                raise ValueError(f"Unsupported path element: {element!r}")

    return segments
