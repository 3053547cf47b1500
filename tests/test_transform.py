# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import math
from typing import Final

import pytest

from bezier_superpowers import AffineTransform, BezierPath, Point

ante: Final = (
    "M 10 10 L 110 10 A 20 20 0 0 1 130 30 L 130 130 C 130 150 110 170 90 170 "
    "L 30 170 Q 10 170 10 150 Z M 40 40 C 60 20 90 20 110 40 C 130 60 130 90 110 110 "
    "C 90 130 60 130 40 110 C 20 90 20 60 40 40 Z M 60 70 a 10 15 30 1 1 20 0 "
    "a 10 15 30 1 1 -20 0 z M 80 120 h 20 v 20 h -20 v -20 z"
)
fractions: Final = [0, 0.1, 0.25, 0.4, 0.5, 0.66, 0.9, 1]


def test_translation() -> None:
    """Translation moves every point and keeps all measurements."""
    ante_path = BezierPath.from_svg_path_data(ante)
    post_path = ante_path.copy()
    post_path.apply(AffineTransform.translation(0.1, 0.2))

    assert post_path.length == pytest.approx(ante_path.length)
    offset = Point(0.1, 0.2)
    for t in fractions:
        expected = ante_path.point_at_fraction(t) + offset
        assert post_path.point_at_fraction(t).is_close(expected)
        assert post_path.tangent_angle_at_fraction(t) == pytest.approx(
            ante_path.tangent_angle_at_fraction(t)
        )


def test_translation_of_measured_path() -> None:
    """Translating after measuring gives the same result as before measuring."""
    measured = BezierPath.from_svg_path_data(ante)
    fresh = measured.copy()
    _ = measured.lookup_table

    t = AffineTransform.translation(-5, 7)
    measured.apply(t)
    fresh.apply(t)

    assert measured.length == pytest.approx(fresh.length)
    for t_ in fractions:
        assert measured.point_at_fraction(t_).is_close(fresh.point_at_fraction(t_))
    for a, b in zip(measured.lookup_table, fresh.lookup_table, strict=True):
        assert a.is_close(b)


def test_scale() -> None:
    """Uniform scaling scales the length."""
    path = BezierPath.from_svg_path_data(ante)
    length = path.length
    path.apply(AffineTransform.scaling(2))
    assert path.length == pytest.approx(2 * length, rel=1e-6)


def test_rotation() -> None:
    """Rotation keeps the length and turns tangents by the rotation angle."""
    path = BezierPath.from_svg_path_data(ante)
    rotated = path.copy()
    rotated.apply(AffineTransform.rotation(math.pi / 6))

    assert rotated.length == pytest.approx(path.length, rel=1e-6)
    p = path.point_at_fraction(0.05)
    assert rotated.point_at_fraction(0.05).is_close(
        AffineTransform.rotation(math.pi / 6).apply(p), abs_tol=1e-6
    )
