# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import math
from dataclasses import dataclass

from .geometry import AffineTransform, Point

type CubicPiece = tuple[Point, Point, Point]


@dataclass(frozen=True)
class EllipticalArc:
    r"""
    Elliptical arc in center parameterization.

    The underlying full ellipse is

    .. math::

        E(θ) = R(φ) ⋅
        \begin{pmatrix}
            r_x \cos θ \\
            r_y \sin θ
        \end{pmatrix}
        + c,

    where all angles are in radians. The arc covers :math:`[θ_0, θ_0 + Δθ]`.

    :ivar c: Center.
    :ivar rx: Radius along the (rotated) x axis.
    :ivar ry: Radius along the (rotated) y axis.
    :ivar phi: Rotation of the ellipse.
    :ivar theta0: Start angle.
    :ivar dtheta: Signed sweep.
    """

    c: Point
    rx: float
    ry: float
    phi: float
    theta0: float
    dtheta: float

    def transform(self) -> AffineTransform:
        """Affine map from the unit circle onto the ellipse."""
        return (
            AffineTransform.scaling(self.rx, self.ry)
            .concatenating(AffineTransform.rotation(self.phi))
            .concatenating(AffineTransform.translation(self.c.x, self.c.y))
        )

    def point(self, theta: float) -> Point:
        """Point on the ellipse at angle ``theta``."""
        return self.transform().apply(Point(math.cos(theta), math.sin(theta)))

    @property
    def start(self) -> Point:
        return self.point(self.theta0)

    @property
    def end(self) -> Point:
        return self.point(self.theta0 + self.dtheta)

    def to_cubics(self) -> list[CubicPiece]:
        r"""
        Approximate the arc by cubic Bézier curves.

        The sweep is split into pieces of at most 90°. A piece from
        :math:`θ_1` to :math:`θ_2` on the unit circle uses control points at
        distance :math:`k = \frac43 \tan\frac{θ_2 - θ_1}{4}` along the tangents,
        which are then mapped onto the ellipse.

        :return: ``(control1, control2, end)`` triples, empty for a zero sweep.
        """
        if self.dtheta == 0:
            return []

        count = max(1, math.ceil(abs(self.dtheta) / (math.pi / 2) - 1e-9))
        step = self.dtheta / count
        k = 4 / 3 * math.tan(step / 4)
        t = self.transform()

        pieces: list[CubicPiece] = []
        for idx in range(count):
            t1 = self.theta0 + idx * step
            t2 = t1 + step
            cos1, sin1 = math.cos(t1), math.sin(t1)
            cos2, sin2 = math.cos(t2), math.sin(t2)
            c1 = Point(cos1 - k * sin1, sin1 + k * cos1)
            c2 = Point(cos2 + k * sin2, sin2 - k * cos2)
            pieces.append((t.apply(c1), t.apply(c2), t.apply(Point(cos2, sin2))))
        return pieces


def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle from ``u`` to ``v``."""
    return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)


def endpoint_to_center(
    p0: Point,
    rx: float,
    ry: float,
    phi_degrees: float,
    large_arc: bool,
    sweep: bool,
    p1: Point,
) -> EllipticalArc | None:
    """
    Convert an SVG endpoint arc to center parameterization.

    Follows the conversion of the SVG implementation notes: radii are made
    positive and scaled up uniformly if they cannot span both end points.

    :return: ``None`` if the arc degenerates, i.e. the end points coincide
             (no arc is drawn) or a radius is zero or too small to be
             represented (a straight line is drawn).
    """
    rx, ry = abs(rx), abs(ry)
    if p0 == p1 or rx * rx == 0 or ry * ry == 0:
        return None

    phi = math.radians(phi_degrees % 360)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    hx, hy = (p0.x - p1.x) / 2, (p0.y - p1.y) / 2
    x1 = cos_phi * hx + sin_phi * hy
    y1 = -sin_phi * hx + cos_phi * hy

    lam = (x1 * x1) / (rx * rx) + (y1 * y1) / (ry * ry)
    if not math.isfinite(lam):
        return None
    if lam > 1:
        scale = math.sqrt(lam)
        rx, ry = rx * scale, ry * scale

    num = rx * rx * ry * ry - rx * rx * y1 * y1 - ry * ry * x1 * x1
    den = rx * rx * y1 * y1 + ry * ry * x1 * x1
    if den == 0:
        return None
    coef = math.sqrt(max(0.0, num / den))
    if large_arc == sweep:
        coef = -coef
    cx1 = coef * rx * y1 / ry
    cy1 = -coef * ry * x1 / rx

    cx = cos_phi * cx1 - sin_phi * cy1 + (p0.x + p1.x) / 2
    cy = sin_phi * cx1 + cos_phi * cy1 + (p0.y + p1.y) / 2

    ux, uy = (x1 - cx1) / rx, (y1 - cy1) / ry
    vx, vy = (-x1 - cx1) / rx, (-y1 - cy1) / ry
    theta0 = _vector_angle(1, 0, ux, uy)
    dtheta = _vector_angle(ux, uy, vx, vy)
    if not sweep and dtheta > 0:
        dtheta -= 2 * math.pi
    elif sweep and dtheta < 0:
        dtheta += 2 * math.pi

    return EllipticalArc(Point(cx, cy), rx, ry, phi, theta0, dtheta)


def circular_sweep(start_angle: float, end_angle: float, increasing: bool) -> float:
    """
    Signed sweep from ``start_angle`` to ``end_angle``.

    The result has the sign given by ``increasing`` and is at most one full
    turn; equal angles give a zero sweep.
    """
    tau = 2 * math.pi
    delta = end_angle - start_angle
    if increasing:
        return min(delta, tau) if delta >= 0 else delta % tau
    return max(delta, -tau) if delta <= 0 else -(-delta % tau)
