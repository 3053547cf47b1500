# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Conversion between SVG path data and :class:`~bezier_superpowers.path.BezierPath`.

Path data is read with all ten SVG commands, relative and absolute. Commands
without a direct path element are lowered: ``H``/``V`` become lines, ``S``/``T``
become full curves with the reflected control point and ``A`` becomes a
sequence of cubic curves. Serialization always writes absolute ``M``, ``L``,
``Q``, ``C`` and ``Z`` commands.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from .arcs import endpoint_to_center
from .elements import PathElement, format_number
from .geometry import Point
from .path_parser import PathParser

if TYPE_CHECKING:
    from .path import BezierPath

_logger = logging.getLogger(__name__)

_minify_cmd_space: Final = re.compile(r"^([a-zA-Z]) ")
_minify_dot_gap: Final = re.compile(r"(\.[0-9]+) (?=\.)")


def append_svg_path_data(path: BezierPath, d: str) -> None:
    """
    Append the commands of the path data ``d`` to ``path``.

    :raises ValueError: If ``d`` is malformed.
    """
    commands = PathParser.parse(d)
    _logger.debug("Parsed %d path commands", len(commands))

    current = Point.ZERO
    subpath_start = Point.ZERO
    # Second control point of the last cubic or control point of the last quad,
    # used to reflect the control point of ``S`` and ``T``.
    last_cubic_control: Point | None = None
    last_quad_control: Point | None = None

    for raw in commands:
        cmd, values = raw[0], [float(v) for v in raw[1:]]
        key = cmd.upper()
        origin = current if cmd.islower() else Point.ZERO

        def at(i: int) -> Point:
            return Point(origin.x + values[i], origin.y + values[i + 1])

        cubic_control: Point | None = None
        quad_control: Point | None = None

        match key:
            case "M":
                current = subpath_start = at(0)
                path.move_to(current)
            case "L":
                current = at(0)
                path.add_line_to(current)
            case "H":
                current = Point(origin.x + values[0], current.y)
                path.add_line_to(current)
            case "V":
                current = Point(current.x, origin.y + values[0])
                path.add_line_to(current)
            case "C":
                control1, cubic_control, current = at(0), at(2), at(4)
                path.add_curve_to(current, control1, cubic_control)
            case "S":
                control1 = (
                    current * 2 - last_cubic_control
                    if last_cubic_control is not None
                    else current
                )
                cubic_control, current = at(0), at(2)
                path.add_curve_to(current, control1, cubic_control)
            case "Q":
                quad_control, current = at(0), at(2)
                path.add_quad_curve_to(current, quad_control)
            case "T":
                quad_control = (
                    current * 2 - last_quad_control
                    if last_quad_control is not None
                    else current
                )
                current = at(0)
                path.add_quad_curve_to(current, quad_control)
            case "A":
                rx, ry, phi, large_arc, sweep = values[:5]
                end = at(5)
                arc = endpoint_to_center(
                    current, rx, ry, phi, bool(large_arc), bool(sweep), end
                )
                if arc is not None:
                    pieces = arc.to_cubics()
                    for idx, (control1, control2, point) in enumerate(pieces):
                        # The last piece ends exactly at the given end point.
                        point = end if idx == len(pieces) - 1 else point
                        path.add_curve_to(point, control1, control2)
                elif end != current:
                    path.add_line_to(end)
                current = end
            case "Z":
                path.close()
                current = subpath_start
            case _:
                raise ValueError(f"Invalid SVG path command: {cmd!r}")

        last_cubic_control = cubic_control
        last_quad_control = quad_control


def format_path_data(
    elements: Iterable[PathElement], decimals: int | None = None, minify: bool = False
) -> str:
    """
    Serialize path elements as SVG path data.

    With ``minify``, runs of the same command share one command letter (line
    commands directly after a move share the move's letter), and spaces that
    are not needed to separate numbers are dropped.

    :param decimals: Fixed number of decimals, ``None`` for the shortest
                     representation.
    :param minify: Produce the shortest possible string.
    """
    groups: list[tuple[str, list[PathElement]]] = []
    for element in elements:
        if minify and groups and groups[-1][0] == element.key:
            groups[-1][1].append(element)
            continue
        group_key = "L" if element.key == "M" else element.key
        groups.append((group_key, [element]))

    parts: list[str] = []
    for _, group in groups:
        values = [
            format_number(v, decimals, minify) for e in group for p in e.points for v in p
        ]
        s = " ".join([group[0].key, *values])
        if minify:
            s = _minify_cmd_space.sub(r"\1", s)
            s = s.replace(" -", "-")
            s = _minify_dot_gap.sub(r"\1", s)
        parts.append(s)

    return "".join(parts) if minify else " ".join(parts)
