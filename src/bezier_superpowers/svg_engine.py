# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Loading of Bézier paths from SVG documents.

Every drawable shape of a document becomes one :class:`SvgBezierPath`. Shapes
are converted to paths in user space: ``transform`` attributes of the shape
and all enclosing groups are applied to the points.
"""

from __future__ import annotations

import logging
import math
import os
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final, Self, override

import defusedxml.ElementTree as ET
from defusedxml import DefusedXmlException

from .geometry import AffineTransform, Point, Rect
from .path import BezierPath
from .settings import CalculationSettings
from .svg_path import append_svg_path_data
from .toolkit import Toolkit

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element

_logger = logging.getLogger(__name__)

# Attributes inherited from enclosing groups.
_presentation_attributes: Final = frozenset(
    {
        "clip-rule",
        "color",
        "display",
        "fill",
        "fill-opacity",
        "fill-rule",
        "opacity",
        "stroke",
        "stroke-dasharray",
        "stroke-dashoffset",
        "stroke-linecap",
        "stroke-linejoin",
        "stroke-miterlimit",
        "stroke-opacity",
        "stroke-width",
        "visibility",
    }
)
# Attributes consumed by the conversion to a path, not kept as attributes.
_geometry_attributes: Final = frozenset(
    {
        "d",
        "points",
        "x",
        "y",
        "x1",
        "y1",
        "x2",
        "y2",
        "width",
        "height",
        "rx",
        "ry",
        "cx",
        "cy",
        "r",
        "transform",
        "style",
    }
)
_containers: Final = frozenset({"svg", "g", "a", "switch"})

_length: Final = re.compile(
    r"^\s*([+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)(px)?\s*$"
)
_number: Final = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_transform_function: Final = re.compile(
    r"\s*(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)\s*,?"
)


class SvgParseError(ValueError):
    """An SVG document or one of its shapes could not be parsed."""


class SvgBezierPath(BezierPath):
    """
    Path loaded from an SVG document.

    :ivar svg_attributes: Presentation attributes of the source element,
                          including those inherited from enclosing groups and
                          the declarations of its ``style`` attribute.
    """

    def __init__(
        self,
        *,
        svg_attributes: Mapping[str, str] | None = None,
        settings: CalculationSettings | None = None,
        toolkit: Toolkit | None = None,
    ) -> None:
        super().__init__(settings=settings, toolkit=toolkit)
        self.svg_attributes: dict[str, str] = dict(svg_attributes or {})

    @override
    def copy(self) -> Self:
        clone = super().copy()
        clone.svg_attributes = dict(self.svg_attributes)
        return clone


def parse_style(style: str) -> dict[str, str]:
    """Split a CSS declaration list such as ``"fill: red; stroke: none"``."""
    result: dict[str, str] = {}
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if sep and name.strip():
            result[name.strip()] = value.strip()
    return result


def parse_transform(value: str) -> AffineTransform:
    """
    Parse an SVG ``transform`` attribute.

    Transform functions in a list apply from right to left, so the result maps
    a point through the last function first.

    :raises SvgParseError: For unknown functions or wrong argument counts.
    """
    total = AffineTransform.IDENTITY
    functions: list[AffineTransform] = []
    pos = 0
    value = value.strip()
    while pos < len(value):
        m = _transform_function.match(value, pos)
        if m is None:
            raise SvgParseError(f"Malformed transform: {value!r}")
        functions.append(_transform_from_function(m.group(1), m.group(2)))
        pos = m.end()

    for function in reversed(functions):
        total = total.concatenating(function)
    return total


def _transform_from_function(name: str, arguments: str) -> AffineTransform:
    args = [_finite(float(a), name) for a in _number.findall(arguments)]
    match name, args:
        case "matrix", [a, b, c, d, e, f]:
            return AffineTransform(a, b, c, d, e, f)
        case "translate", [tx]:
            return AffineTransform.translation(tx, 0.0)
        case "translate", [tx, ty]:
            return AffineTransform.translation(tx, ty)
        case "scale", [sx]:
            return AffineTransform.scaling(sx)
        case "scale", [sx, sy]:
            return AffineTransform.scaling(sx, sy)
        case "rotate", [angle]:
            return AffineTransform.rotation(math.radians(angle))
        case "rotate", [angle, cx, cy]:
            return (
                AffineTransform.translation(-cx, -cy)
                .concatenating(AffineTransform.rotation(math.radians(angle)))
                .concatenating(AffineTransform.translation(cx, cy))
            )
        case "skewX", [angle]:
            return AffineTransform(c=math.tan(math.radians(angle)))
        case "skewY", [angle]:
            return AffineTransform(b=math.tan(math.radians(angle)))
        case _:
            raise SvgParseError(f"Malformed transform function: {name}({arguments})")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _own_attributes(element: Element) -> dict[str, str]:
    # Namespaced attributes (e.g. xlink:href) are left out.
    return {k: v for k, v in element.attrib.items() if not k.startswith("{")}


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise SvgParseError(f"Number out of range in {what}")
    return value


def _length_attribute(element: Element, name: str, default: float = 0.0) -> float:
    raw = element.get(name)
    if raw is None:
        return default
    m = _length.match(raw)
    if m is None:
        raise SvgParseError(f"Unsupported length {name}={raw!r}")
    return _finite(float(m.group(1)), name)


class _Loader:
    def __init__(
        self,
        strict: bool,
        settings: CalculationSettings | None,
        toolkit: Toolkit | None,
    ) -> None:
        self.strict = strict
        self.settings = settings
        self.toolkit = toolkit
        self.paths: list[SvgBezierPath] = []

    def _recover(self, element: Element, error: ValueError) -> None:
        tag = _local_name(element.tag)
        if self.strict:
            raise SvgParseError(f"Invalid <{tag}> element: {error}") from error
        _logger.warning("Skipping invalid <%s> element: %s", tag, error)

    def walk(
        self, element: Element, inherited: dict[str, str], parent: AffineTransform
    ) -> None:
        tag = _local_name(element.tag)
        attributes = _own_attributes(element)
        try:
            transform = parse_transform(attributes.get("transform", ""))
        except ValueError as e:
            self._recover(element, e)
            return
        transform = transform.concatenating(parent)

        if tag in _containers:
            group_attributes = inherited | {
                k: v for k, v in attributes.items() if k in _presentation_attributes
            }
            group_attributes |= {
                k: v
                for k, v in parse_style(attributes.get("style", "")).items()
                if k in _presentation_attributes
            }
            for child in element:
                self.walk(child, group_attributes, transform)
            return

        svg_attributes = (
            inherited
            | {k: v for k, v in attributes.items() if k not in _geometry_attributes}
            | parse_style(attributes.get("style", ""))
        )
        path = SvgBezierPath(
            svg_attributes=svg_attributes, settings=self.settings, toolkit=self.toolkit
        )
        try:
            converted = self._convert(tag, element, path)
        except ValueError as e:
            self._recover(element, e)
            return
        if not converted:
            return

        path.apply(transform)
        self.paths.append(path)

    def _convert(self, tag: str, element: Element, path: SvgBezierPath) -> bool:
        """Add the outline of a shape to ``path``; ``False`` if it draws nothing."""
        match tag:
            case "path":
                append_svg_path_data(path, element.get("d", ""))
            case "line":
                path.move_to(
                    Point(_length_attribute(element, "x1"), _length_attribute(element, "y1"))
                )
                path.add_line_to(
                    Point(_length_attribute(element, "x2"), _length_attribute(element, "y2"))
                )
            case "rect":
                rect = Rect(
                    _length_attribute(element, "x"),
                    _length_attribute(element, "y"),
                    _length_attribute(element, "width"),
                    _length_attribute(element, "height"),
                )
                if rect.width < 0 or rect.height < 0:
                    raise SvgParseError("Negative rectangle size")
                if rect.is_empty:
                    return False
                rx = element.get("rx")
                ry = element.get("ry")
                radius_x = _length_attribute(element, "rx") if rx is not None else None
                radius_y = _length_attribute(element, "ry") if ry is not None else None
                radius_x = radius_y if radius_x is None else radius_x
                radius_y = radius_x if radius_y is None else radius_y
                path.append_rounded_rect(rect, radius_x or 0.0, radius_y or 0.0)
            case "circle" | "ellipse":
                cx = _length_attribute(element, "cx")
                cy = _length_attribute(element, "cy")
                if tag == "circle":
                    rx = ry = _length_attribute(element, "r")
                else:
                    rx = _length_attribute(element, "rx")
                    ry = _length_attribute(element, "ry")
                if rx < 0 or ry < 0:
                    raise SvgParseError("Negative radius")
                if rx == 0 or ry == 0:
                    return False
                path.append_oval(Rect(cx - rx, cy - ry, 2 * rx, 2 * ry))
            case "polyline" | "polygon":
                values = [
                    _finite(float(v), "points")
                    for v in _number.findall(element.get("points", ""))
                ]
                if len(values) % 2:
                    raise SvgParseError("Odd number of coordinates in points")
                points = [Point(x, y) for x, y in zip(values[::2], values[1::2])]
                if not points:
                    return False
                path.move_to(points[0])
                for point in points[1:]:
                    path.add_line_to(point)
                if tag == "polygon":
                    path.close()
            case _:
                _logger.debug("Skipping unsupported element <%s>", tag)
                return False
        return not path.is_empty


def paths_from_svg(
    source: str | bytes,
    strict: bool = False,
    *,
    settings: CalculationSettings | None = None,
    toolkit: Toolkit | None = None,
) -> list[SvgBezierPath]:
    """
    Load all drawable shapes of an SVG document as paths.

    :param source: The SVG document.
    :param strict: Raise on shapes with malformed geometry instead of skipping
                   them with a warning.
    :param settings: Calculation settings of the returned paths.
    :param toolkit: Toolkit of the returned paths.
    :return: The paths in document order.
    :raises SvgParseError: If the document is not well-formed XML, forbidden
                           XML constructs are used or the root is not ``svg``.
    """
    try:
        root = ET.fromstring(source)
    except (ET.ParseError, DefusedXmlException) as e:
        raise SvgParseError(f"Failed to parse SVG: {e}") from e

    if _local_name(root.tag) != "svg":
        raise SvgParseError(f"Root element is <{_local_name(root.tag)}>, not <svg>")

    loader = _Loader(strict, settings, toolkit)
    loader.walk(root, {}, AffineTransform.IDENTITY)
    _logger.debug("Loaded %d paths from SVG", len(loader.paths))
    return loader.paths


def paths_from_svg_file(
    path: str | os.PathLike[str],
    strict: bool = False,
    *,
    settings: CalculationSettings | None = None,
    toolkit: Toolkit | None = None,
) -> list[SvgBezierPath]:
    """Load all drawable shapes of the SVG file at ``path``, see :func:`paths_from_svg`."""
    with open(path, "rb") as f:
        source = f.read()
    return paths_from_svg(source, strict, settings=settings, toolkit=toolkit)
