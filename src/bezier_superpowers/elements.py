# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

import re
from typing import ClassVar, Final, final, override

from .geometry import AffineTransform, Point

_number_strip_trailing_zeros: Final = re.compile(r"^(-?[0-9]*\.([0-9]*[1-9])?)0*$")
_number_strip_dot: Final = re.compile(r"\.$")
_number_leading_zero: Final = re.compile(r"^(-?)0\.")


def format_number(v: float, d: int | None, minify: bool = False) -> str:
    """Format a float with optional fixed decimals and SVG number minification."""
    s = f"{v:.{d}f}" if d is not None else repr(float(v))
    s = _number_strip_trailing_zeros.sub(r"\1", s)
    s = _number_strip_dot.sub("", s)
    if s in ("-0", ""):
        s = "0"
    if minify:
        s = _number_leading_zero.sub(r"\1.", s)
    return s


class PathElement:
    """Base class for a single path building instruction."""

    key: ClassVar[str]

    def __init__(self, *points: Point) -> None:
        self.points: tuple[Point, ...] = points

    @property
    def end_point(self) -> Point | None:
        """Point the current point moves to, ``None`` for :class:`ClosePath`."""
        return self.points[-1] if self.points else None

    @property
    def draws(self) -> bool:
        """Whether this element contributes to the outline of the path."""
        return True

    def transformed(self, t: AffineTransform) -> PathElement:
        """Return a copy with all points mapped by ``t``."""
        return self.__class__(*(t.apply(p) for p in self.points))

    def as_string(self, decimals: int | None = None, minify: bool = False) -> str:
        """Serialize this element as an absolute SVG path command."""
        values = [format_number(v, decimals, minify) for p in self.points for v in p]
        return " ".join([self.key, *values])

    @override
    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return False
        assert isinstance(other, PathElement)
        return self.points == other.points

    @override
    def __hash__(self) -> int:
        return hash((self.key, self.points))

    @override
    def __repr__(self) -> str:
        args = ", ".join(f"Point({p.x!r}, {p.y!r})" for p in self.points)
        return f"{self.__class__.__name__}({args})"


@final
class MoveTo(PathElement):
    key = "M"

    def __init__(self, point: Point) -> None:
        super().__init__(point)

    @property
    @override
    def draws(self) -> bool:
        return False


@final
class LineTo(PathElement):
    key = "L"

    def __init__(self, point: Point) -> None:
        super().__init__(point)


@final
class QuadCurveTo(PathElement):
    key = "Q"

    def __init__(self, control: Point, point: Point) -> None:
        super().__init__(control, point)

    @property
    def control(self) -> Point:
        return self.points[0]


@final
class CurveTo(PathElement):
    key = "C"

    def __init__(self, control1: Point, control2: Point, point: Point) -> None:
        super().__init__(control1, control2, point)

    @property
    def control1(self) -> Point:
        return self.points[0]

    @property
    def control2(self) -> Point:
        return self.points[1]


@final
class ClosePath(PathElement):
    key = "Z"

    def __init__(self) -> None:
        super().__init__()
