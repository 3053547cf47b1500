# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import ClassVar, Self, override

from .arcs import EllipticalArc, circular_sweep
from .elements import ClosePath, CurveTo, LineTo, MoveTo, PathElement, QuadCurveTo
from .geometry import AffineTransform, Point, Rect
from .segments import Segment, extract_segments
from .settings import CalculationSettings
from .toolkit import DEFAULT_TOOLKIT, Toolkit

_logger = logging.getLogger(__name__)


class _Calculations:
    """Cached measurements of a path, valid for one set of settings."""

    def __init__(self, settings: CalculationSettings, segments: list[Segment]) -> None:
        self.settings: CalculationSettings = settings
        self.segments: list[Segment] = segments
        self.length: float = sum(s.length for s in segments)
        self.length_ranges_calculated: bool = False
        self.lookup_table_calculated: bool = False

    def translated(self, dx: float, dy: float) -> _Calculations:
        shifted = object.__new__(_Calculations)
        shifted.settings = self.settings
        shifted.segments = [s.translated(dx, dy) for s in self.segments]
        shifted.length = self.length
        shifted.length_ranges_calculated = self.length_ranges_calculated
        shifted.lookup_table_calculated = self.lookup_table_calculated
        return shifted


class BezierPath:
    """
    Mutable path of lines and Bézier curves with length-based measurements.

    The path is built like a toolkit path object (:meth:`move_to`,
    :meth:`add_line_to`, ...). Measurements are cached and the cache is
    dropped by every mutating method, so querying a path repeatedly is cheap.

    :cvar calculation_settings: Process-wide default precision.
    :ivar toolkit: Coordinate convention for slopes, angles and arc directions.
    """

    calculation_settings: ClassVar[CalculationSettings] = CalculationSettings.BALANCED

    def __init__(
        self,
        *,
        settings: CalculationSettings | None = None,
        toolkit: Toolkit | None = None,
    ) -> None:
        self._elements: list[PathElement] = []
        self._settings: CalculationSettings | None = settings
        self.toolkit: Toolkit = toolkit if toolkit is not None else DEFAULT_TOOLKIT
        self._current_point: Point | None = None
        self._subpath_start: Point | None = None
        self._calculations: _Calculations | None = None

    @classmethod
    def from_svg_path_data(
        cls,
        d: str,
        *,
        settings: CalculationSettings | None = None,
        toolkit: Toolkit | None = None,
    ) -> Self:
        """
        Build a path from SVG path data such as ``"M 0 0 L 10 0 Z"``.

        :raises ValueError: If the path data is malformed.
        """
        from .svg_path import append_svg_path_data

        path = cls(settings=settings, toolkit=toolkit)
        append_svg_path_data(path, d)
        return path

    # ---- settings ----------------------------------------------------------------

    @property
    def settings(self) -> CalculationSettings:
        """Effective settings: the instance override or the class default."""
        if self._settings is not None:
            return self._settings
        return type(self).calculation_settings

    @settings.setter
    def settings(self, settings: CalculationSettings | None) -> None:
        self._settings = settings

    # ---- inspection --------------------------------------------------------------

    @property
    def elements(self) -> tuple[PathElement, ...]:
        """Elements the path was built from, in drawing order."""
        return tuple(self._elements)

    @property
    def is_empty(self) -> bool:
        """``True`` if the path has no elements at all."""
        return not self._elements

    @property
    def current_point(self) -> Point | None:
        """End point of the last element, ``None`` for an empty path."""
        return self._current_point

    @property
    def segments(self) -> list[Segment]:
        """Measured segments of the path."""
        return list(self._calculate().segments)

    @property
    def bounds(self) -> Rect:
        """
        Tight bounding box of the drawn outline.

        Curves contribute their extreme points, not their control points.
        :attr:`Rect.ZERO` is returned for a path without segments.
        """
        return Rect.from_points(
            p for s in self._calculate().segments for p in s.extreme_points()
        )

    @property
    def control_point_bounds(self) -> Rect:
        """Bounding box of all points of all elements, control points included."""
        return Rect.from_points(p for e in self._elements for p in e.points)

    def svg_path_data(self, decimals: int | None = None, minify: bool = False) -> str:
        """Serialize the path as SVG path data with absolute commands."""
        from .svg_path import format_path_data

        return format_path_data(self._elements, decimals, minify)

    def copy(self) -> Self:
        """Return an independent copy with the same elements and settings."""
        clone = type(self)(settings=self._settings, toolkit=self.toolkit)
        clone._elements = list(self._elements)
        clone._current_point = self._current_point
        clone._subpath_start = self._subpath_start
        return clone

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.svg_path_data()!r})"

    # ---- construction ------------------------------------------------------------

    def _require_current_point(self) -> Point:
        if self._current_point is None:
            raise ValueError("Invalid path: no current point")
        return self._current_point

    def _advance(self, element: PathElement) -> None:
        match element:
            case MoveTo():
                self._current_point = self._subpath_start = element.points[0]
            case ClosePath():
                self._current_point = self._subpath_start
            case _:
                self._current_point = element.end_point

    def _add(self, element: PathElement) -> None:
        self._elements.append(element)
        self._advance(element)
        self.invalidate_calculations()

    def move_to(self, point: Point) -> None:
        """Start a new subpath at ``point``."""
        self._add(MoveTo(point))

    def add_line_to(self, point: Point) -> None:
        """Append a straight line from the current point to ``point``."""
        self._require_current_point()
        self._add(LineTo(point))

    def add_quad_curve_to(self, point: Point, control: Point) -> None:
        """Append a quadratic Bézier curve ending in ``point``."""
        self._require_current_point()
        self._add(QuadCurveTo(control, point))

    def add_curve_to(self, point: Point, control1: Point, control2: Point) -> None:
        """Append a cubic Bézier curve ending in ``point``."""
        self._require_current_point()
        self._add(CurveTo(control1, control2, point))

    def relative_move_to(self, delta: Point) -> None:
        """Start a new subpath at the current point shifted by ``delta``."""
        self.move_to(self._require_current_point() + delta)

    def relative_line_to(self, delta: Point) -> None:
        """Append a line to the current point shifted by ``delta``."""
        self.add_line_to(self._require_current_point() + delta)

    def relative_curve_to(
        self, delta: Point, control_delta1: Point, control_delta2: Point
    ) -> None:
        """Append a cubic curve whose points are given relative to the current point."""
        current = self._require_current_point()
        self.add_curve_to(current + delta, current + control_delta1, current + control_delta2)

    def add_arc(
        self,
        center: Point,
        radius: float,
        start_angle: float,
        end_angle: float,
        clockwise: bool,
    ) -> None:
        """
        Append a circular arc.

        A line connects the current point with the start of the arc; without a
        current point, a new subpath is started there. ``clockwise`` refers to
        the visual direction in the coordinate system of :attr:`toolkit`.

        :param center: Center of the circle.
        :param radius: Radius of the circle.
        :param start_angle: Start angle in radians.
        :param end_angle: End angle in radians.
        :param clockwise: Direction in which the arc is drawn.
        """
        increasing = clockwise == self.toolkit.flipped
        sweep = circular_sweep(start_angle, end_angle, increasing)
        arc = EllipticalArc(center, radius, radius, 0.0, start_angle, sweep)
        self._append_arc(arc)

    def _append_arc(self, arc: EllipticalArc) -> None:
        start = arc.start
        if self._current_point is None:
            self.move_to(start)
        elif self._current_point != start:
            self.add_line_to(start)
        for control1, control2, end in arc.to_cubics():
            self._add(CurveTo(control1, control2, end))

    def close(self) -> None:
        """Close the current subpath with a line back to its start."""
        if self._current_point is None:
            return
        self._add(ClosePath())

    def remove_all_points(self) -> None:
        """Remove all elements."""
        self._elements.clear()
        self._current_point = self._subpath_start = None
        self.invalidate_calculations()

    def append(self, other: BezierPath) -> None:
        """Append all elements of ``other``."""
        for element in other.elements:
            self._add(element)

    def append_points(self, points: Iterable[Point]) -> None:
        """
        Connect ``points`` with straight lines.

        Without a current point, the first point starts a new subpath.
        """
        for point in points:
            if self._current_point is None:
                self.move_to(point)
            else:
                self.add_line_to(point)

    def set_associated_points(self, points: Sequence[Point], index: int) -> None:
        """
        Replace the points of the element at ``index``.

        Points are given in the order of :attr:`PathElement.points`; surplus
        points are ignored.

        :raises IndexError: If there is no element at ``index``.
        :raises ValueError: If ``points`` is too short for the element.
        """
        element = self._elements[index]
        count = len(element.points)
        if len(points) < count:
            raise ValueError(
                f"{type(element).__name__} needs {count} points, got {len(points)}"
            )
        self._elements[index] = element.__class__(*points[:count])

        self._current_point = self._subpath_start = None
        for e in self._elements:
            self._advance(e)
        self.invalidate_calculations()

    def append_rect(self, rect: Rect) -> None:
        """Append a closed rectangle subpath."""
        self.move_to(Point(rect.min_x, rect.min_y))
        self.add_line_to(Point(rect.max_x, rect.min_y))
        self.add_line_to(Point(rect.max_x, rect.max_y))
        self.add_line_to(Point(rect.min_x, rect.max_y))
        self.close()

    def append_oval(self, rect: Rect) -> None:
        """Append a closed ellipse inscribed in ``rect``."""
        rx, ry = rect.width / 2, rect.height / 2
        center = Point(rect.min_x + rx, rect.min_y + ry)
        self.move_to(Point(rect.max_x, center.y))
        self._append_arc(EllipticalArc(center, rx, ry, 0.0, 0.0, 2 * math.pi))
        self.close()

    def append_rounded_rect(self, rect: Rect, rx: float, ry: float | None = None) -> None:
        """
        Append a closed rectangle with elliptical corners.

        Radii are clamped to half the width and height; a zero radius gives a
        plain rectangle.
        """
        ry = rx if ry is None else ry
        rx, ry = min(abs(rx), rect.width / 2), min(abs(ry), rect.height / 2)
        if rx == 0 or ry == 0:
            self.append_rect(rect)
            return

        x0, y0, x1, y1 = rect.min_x, rect.min_y, rect.max_x, rect.max_y
        quarter = math.pi / 2
        corners = [
            (Point(x1 - rx, y0 + ry), -quarter),
            (Point(x1 - rx, y1 - ry), 0.0),
            (Point(x0 + rx, y1 - ry), quarter),
            (Point(x0 + rx, y0 + ry), 2 * quarter),
        ]
        self.move_to(Point(x0 + rx, y0))
        for center, theta0 in corners:
            self._append_arc(EllipticalArc(center, rx, ry, 0.0, theta0, quarter))
        self.close()

    def apply(self, transform: AffineTransform) -> None:
        """
        Transform all points in place.

        A pure translation shifts the cached measurements, any other transform
        discards them.
        """
        if transform.is_identity:
            return
        self._elements = [e.transformed(transform) for e in self._elements]
        if self._current_point is not None:
            self._current_point = transform.apply(self._current_point)
        if self._subpath_start is not None:
            self._subpath_start = transform.apply(self._subpath_start)

        if transform.is_translation_only and self._calculations is not None:
            self._calculations = self._calculations.translated(transform.tx, transform.ty)
        else:
            self.invalidate_calculations()

    # ---- cache -------------------------------------------------------------------

    def invalidate_calculations(self) -> None:
        """Drop all cached measurements."""
        self._calculations = None

    def _calculate(self) -> _Calculations:
        settings = self.settings
        calc = self._calculations
        if calc is None or calc.settings != settings:
            segments = extract_segments(self._elements, settings.length_precision.value)
            calc = self._calculations = _Calculations(settings, segments)
            _logger.debug(
                "Measured %d segments, total length %g", len(segments), calc.length
            )
        return calc

    def _calculate_length_ranges(self) -> _Calculations:
        calc = self._calculate()
        if calc.length_ranges_calculated:
            return calc

        segments, total = calc.segments, calc.length
        start = 0.0
        for idx, segment in enumerate(segments):
            share = segment.length / total if total > 0 else 1 / len(segments)
            end = 1.0 if idx == len(segments) - 1 else start + share
            segment.length_range = (start, end)
            start = end

        calc.length_ranges_calculated = True
        return calc

    def _calculate_lookup_table(self) -> _Calculations:
        calc = self._calculate()
        if calc.lookup_table_calculated:
            return calc

        # The start and end point of the whole path are always included.
        step = calc.settings.perpendicular_precision.value
        offset = 0.0
        last = len(calc.segments) - 1

        for idx, segment in enumerate(calc.segments):
            points: list[Point] = []
            while offset < segment.length:
                points.append(segment.point(offset / segment.length))
                offset += step
            if idx == last:
                points.append(segment.point(1.0))
            offset -= segment.length
            if not points:
                points.append(segment.point(0.5))
            segment.lookup_table = points

        calc.lookup_table_calculated = True
        return calc

    def _find_segment(self, t: float) -> tuple[Segment, float] | None:
        t = min(max(0.0, t), 1.0)
        for segment in self._calculate_length_ranges().segments:
            assert segment.length_range is not None
            lo, hi = segment.length_range
            if lo <= t <= hi:
                return segment, (t - lo) / (hi - lo) if hi > lo else 0.0
        return None

    # ---- measurements ------------------------------------------------------------

    @property
    def length(self) -> float:
        """Total length of all segments."""
        return self._calculate().length

    def point_at_fraction(self, t: float) -> Point:
        """
        Point at ``t * length`` into the path.

        :param t: Fraction of the total length, clamped to :math:`[0, 1]`.
        :return: :attr:`Point.ZERO` if the path has no segments.
        """
        found = self._find_segment(t)
        if found is None:
            return Point.ZERO
        segment, local_t = found
        return segment.point(local_t)

    def slope_at_fraction(self, t: float) -> float:
        """
        Slope of the path at ``t * length`` into the path.

        The slope is expressed against the positive cartesian x axis: on a
        flipped toolkit a path from ``(0, 100)`` to ``(100, 0)`` has slope
        ``1`` everywhere. Vertical tangents give :math:`±∞`.
        Only flipped toolkits negate the measured slope; on
        :attr:`Toolkit.APPKIT` it is returned unchanged.

        :return: ``0`` if the path has no segments.
        """
        found = self._find_segment(t)
        if found is None:
            return 0.0
        segment, local_t = found
        return self.toolkit.y_sign * segment.slope(local_t)

    def tangent_angle_at_fraction(self, t: float) -> float:
        """
        Tangent angle in radians at ``t * length`` into the path.

        Rotating a horizontal line through the point counter-clockwise (in
        cartesian terms) by the returned angle makes it the tangent of the path
        in that point.
        As with :meth:`slope_at_fraction`, the angle is negated on flipped
        toolkits only.

        :return: ``0`` if the path has no segments.
        """
        found = self._find_segment(t)
        if found is None:
            return 0.0
        segment, local_t = found
        angle = segment.tangent_angle(local_t)
        return -angle if self.toolkit.flipped else angle

    @property
    def lookup_table(self) -> list[Point]:
        """Sample points used by :meth:`perpendicular_point`."""
        calc = self._calculate_lookup_table()
        return [p for s in calc.segments for p in s.lookup_table or ()]

    def perpendicular_point(self, point: Point) -> Point:
        """
        Closest point on the path to ``point``.

        This is the foot of the perpendicular dropped from ``point`` onto the
        path, up to the step of the lookup table.

        :return: :attr:`Point.ZERO` if the path has no segments.
        """
        closest, distance = Point.ZERO, math.inf
        for candidate in self.lookup_table:
            d = candidate.distance_to(point)
            if d < distance:
                closest, distance = candidate, d
        return closest

    def perpendicular_distance(self, point: Point) -> float:
        """Distance from ``point`` to :meth:`perpendicular_point`."""
        return self.perpendicular_point(point).distance_to(point)

    def points_at_fractions(self, fractions: Sequence[float]) -> list[Point]:
        """Vectorized :meth:`point_at_fraction`."""
        return [self.point_at_fraction(t) for t in fractions]
