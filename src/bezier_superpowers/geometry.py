# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, override

from .math import float_to_rat, polynomial_roots

if TYPE_CHECKING:
    from .math import Expr

# ------------------------------------------------------------------------------
# Basic geometric primitives
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    """2D point (or vector) with float coordinates."""

    x: float
    y: float

    ZERO: ClassVar[Point]

    def __iter__(self) -> Iterator[float]:
        """Iterate as ``(x, y)``."""
        yield self.x
        yield self.y

    @override
    def __str__(self) -> str:
        """Human-readable representation ``(x, y)``."""
        return f"({self.x:g}, {self.y:g})"

    @property
    def length(self) -> float:
        """Euclidean norm :math:`‖v‖_2 = \\sqrt{x^2 + y^2}`."""
        return math.hypot(self.x, self.y)

    @property
    def normalized(self) -> Point:
        """
        Unit vector :math:`v / ‖v‖_2`.

        The zero vector is returned unchanged.
        """
        length = self.length
        if length == 0:
            return Point.ZERO
        return self / length

    def distance_to(self, other: Point) -> float:
        """Euclidean distance :math:`‖w - v‖_2`."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def is_close(self, other: Point, *, abs_tol: float = 1e-9) -> bool:
        """Compare both coordinates with :func:`math.isclose`."""
        return math.isclose(self.x, other.x, abs_tol=abs_tol) and math.isclose(
            self.y, other.y, abs_tol=abs_tol
        )

    # ---- vector arithmetic -------------------------------------------------------

    def __neg__(self) -> Point:
        """Unary minus :math:`-v`."""
        return Point(-self.x, -self.y)

    def __add__(self, other: Point) -> Point:
        """Vector addition :math:`v + w`."""
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        """Vector subtraction :math:`v - w`."""
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, other: float) -> Point:
        r"""Scalar multiplication :math:`v ⋅ λ`."""
        return Point(self.x * other, self.y * other)

    def __truediv__(self, other: float) -> Point:
        """Scalar division :math:`v / λ`."""
        return Point(self.x / other, self.y / other)


Point.ZERO = Point(0.0, 0.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its origin and size."""

    x: float
    y: float
    width: float
    height: float

    ZERO: ClassVar[Rect]

    @staticmethod
    def from_points(points: Iterable[Point]) -> Rect:
        """
        Smallest rectangle containing all ``points``.

        :return: :attr:`Rect.ZERO` if ``points`` is empty.
        """
        pts = list(points)
        if not pts:
            return Rect.ZERO
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        return Rect(min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def is_empty(self) -> bool:
        """``True`` if the rectangle has no area."""
        return self.width == 0 or self.height == 0


Rect.ZERO = Rect(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True)
class AffineTransform:
    r"""
    Affine transform of the plane

    .. math::

        \begin{pmatrix} x' \\ y' \end{pmatrix} =
        \begin{pmatrix} a & c \\ b & d \end{pmatrix}
        \begin{pmatrix} x \\ y \end{pmatrix} +
        \begin{pmatrix} t_x \\ t_y \end{pmatrix},

    using the same parameter order as the SVG ``matrix(a b c d e f)`` function.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    tx: float = 0.0
    ty: float = 0.0

    IDENTITY: ClassVar[AffineTransform]

    @staticmethod
    def translation(tx: float, ty: float) -> AffineTransform:
        return AffineTransform(tx=tx, ty=ty)

    @staticmethod
    def scaling(sx: float, sy: float | None = None) -> AffineTransform:
        return AffineTransform(a=sx, d=sx if sy is None else sy)

    @staticmethod
    def rotation(angle: float) -> AffineTransform:
        """Rotation by ``angle`` radians around the origin."""
        cosv, sinv = math.cos(angle), math.sin(angle)
        return AffineTransform(a=cosv, b=sinv, c=-sinv, d=cosv)

    def concatenating(self, other: AffineTransform) -> AffineTransform:
        """Transform that applies ``self`` first and ``other`` afterwards."""
        return AffineTransform(
            a=other.a * self.a + other.c * self.b,
            b=other.b * self.a + other.d * self.b,
            c=other.a * self.c + other.c * self.d,
            d=other.b * self.c + other.d * self.d,
            tx=other.a * self.tx + other.c * self.ty + other.tx,
            ty=other.b * self.tx + other.d * self.ty + other.ty,
        )

    def apply(self, p: Point) -> Point:
        """Map a point."""
        return Point(
            self.a * p.x + self.c * p.y + self.tx,
            self.b * p.x + self.d * p.y + self.ty,
        )

    @property
    def is_identity(self) -> bool:
        return self == AffineTransform.IDENTITY

    @property
    def is_translation_only(self) -> bool:
        """
        Whether this transform solely consists of a non-zero translation.

        The identity is *not* considered translation-only.
        """
        linear_identity = (self.a, self.b, self.c, self.d) == (1, 0, 0, 1)
        return linear_identity and (self.tx != 0 or self.ty != 0)


AffineTransform.IDENTITY = AffineTransform()

# ------------------------------------------------------------------------------
# Bézier evaluation
# ------------------------------------------------------------------------------


def _quad(t: float, start: float, c: float, end: float) -> float:
    r"""Quadratic Bernstein form :math:`(1-t)^2 s + 2(1-t)t c + t^2 e`."""
    mt = 1 - t
    return mt * mt * start + 2 * mt * t * c + t * t * end


def _quad_dt(t: float, start: float, c: float, end: float) -> float:
    r"""Derivative :math:`2(1-t)(c - s) + 2t(e - c)`."""
    return 2 * (1 - t) * (c - start) + 2 * t * (end - c)


def _cubic(t: float, start: float, c1: float, c2: float, end: float) -> float:
    r"""Cubic Bernstein form."""
    mt = 1 - t
    return (
        mt * mt * mt * start
        + 3 * mt * mt * t * c1
        + 3 * mt * t * t * c2
        + t * t * t * end
    )


def _cubic_dt(t: float, start: float, c1: float, c2: float, end: float) -> float:
    r"""Derivative :math:`3(1-t)^2(c_1-s) + 6(1-t)t(c_2-c_1) + 3t^2(e-c_2)`."""
    mt = 1 - t
    return 3 * mt * mt * (c1 - start) + 6 * mt * t * (c2 - c1) + 3 * t * t * (end - c2)


def linear_point(t: float, p0: Point, p1: Point) -> Point:
    """Point :math:`p_0 + (p_1 - p_0) t` on a line."""
    return Point(p0.x + t * (p1.x - p0.x), p0.y + t * (p1.y - p0.y))


def quad_point(t: float, p0: Point, c: Point, p1: Point) -> Point:
    """Point on a quadratic Bézier curve."""
    return Point(_quad(t, p0.x, c.x, p1.x), _quad(t, p0.y, c.y, p1.y))


def quad_derivative(t: float, p0: Point, c: Point, p1: Point) -> Point:
    """First derivative of a quadratic Bézier curve with respect to ``t``."""
    return Point(_quad_dt(t, p0.x, c.x, p1.x), _quad_dt(t, p0.y, c.y, p1.y))


def cubic_point(t: float, p0: Point, c1: Point, c2: Point, p1: Point) -> Point:
    """Point on a cubic Bézier curve."""
    return Point(
        _cubic(t, p0.x, c1.x, c2.x, p1.x), _cubic(t, p0.y, c1.y, c2.y, p1.y)
    )


def cubic_derivative(t: float, p0: Point, c1: Point, c2: Point, p1: Point) -> Point:
    """First derivative of a cubic Bézier curve with respect to ``t``."""
    return Point(
        _cubic_dt(t, p0.x, c1.x, c2.x, p1.x), _cubic_dt(t, p0.y, c1.y, c2.y, p1.y)
    )


def polyline_length(curve: Callable[[float], Point], samples: int) -> float:
    """
    Approximate the length of ``curve`` on :math:`[0, 1]`.

    The curve is sampled at ``samples + 1`` equidistant parameters and the
    lengths of the connecting chords are summed up.
    """
    length = 0.0
    previous = curve(0.0)
    for idx in range(1, samples + 1):
        current = curve(idx / samples)
        length += previous.distance_to(current)
        previous = current
    return length


# ------------------------------------------------------------------------------
# Extrema
# ------------------------------------------------------------------------------


def derivative_roots(coeffs: Sequence[float | Expr]) -> list[float]:
    """
    Parameters in the open interval :math:`(0, 1)` where a derivative vanishes.

    :param coeffs: Coefficients of the derivative in the power basis,
                   highest degree first (at most degree 2). Floats are
                   converted to rationals, SymPy values are used as given.
    :return: Sorted distinct roots in :math:`(0, 1)`. A derivative that is
             identically zero has no isolated roots and yields ``[]``.
    """
    import sympy as sp

    exact = [c if isinstance(c, sp.Basic) else float_to_rat(c) for c in coeffs]
    if all(c == 0 for c in exact):
        return []

    t = sp.Symbol("t", real=True)
    degree = len(exact) - 1
    poly = sp.Add(*(c * t ** (degree - i) for i, c in enumerate(exact)))
    roots = polynomial_roots(poly, t)
    return sorted({float(r) for r in roots if r.is_real and 0 < float(r) < 1})


def _rational_axes(*points: Point) -> list[list[Expr]]:
    # Coefficients are formed on rationals so large coordinates cannot overflow.
    return [[float_to_rat(p.x) for p in points], [float_to_rat(p.y) for p in points]]


def quad_extrema_parameters(p0: Point, c: Point, p1: Point) -> list[float]:
    """Parameters of the axis-aligned extrema of a quadratic Bézier curve."""
    result: set[float] = set()
    for s, k, e in _rational_axes(p0, c, p1):
        result.update(derivative_roots([2 * (e - 2 * k + s), 2 * (k - s)]))
    return sorted(result)


def cubic_extrema_parameters(p0: Point, c1: Point, c2: Point, p1: Point) -> list[float]:
    """Parameters of the axis-aligned extrema of a cubic Bézier curve."""
    result: set[float] = set()
    for s, k1, k2, e in _rational_axes(p0, c1, c2, p1):
        a, b, c = k1 - s, k2 - k1, e - k2
        result.update(derivative_roots([3 * (a - 2 * b + c), 6 * (b - a), 3 * a]))
    return sorted(result)
