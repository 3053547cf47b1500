# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Command line access to the path measurements of SVG files."""

from __future__ import annotations

import logging
import math
from pathlib import Path

import click

from .geometry import Point
from .settings import CalculationSettings
from .svg_engine import SvgBezierPath, SvgParseError, paths_from_svg_file
from .toolkit import DEFAULT_TOOLKIT, Toolkit

_svg_file = click.argument(
    "svg_file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
_index = click.option(
    "--index", "-i", type=int, default=0, show_default=True, help="Index of the path"
)


def _load(ctx: click.Context, svg_file: Path) -> list[SvgBezierPath]:
    try:
        paths = paths_from_svg_file(
            svg_file, settings=ctx.obj["settings"], toolkit=ctx.obj["toolkit"]
        )
    except SvgParseError as e:
        raise click.ClickException(str(e)) from e
    if not paths:
        raise click.ClickException(f"No paths found in {svg_file}")
    return paths


def _select(ctx: click.Context, svg_file: Path, index: int) -> SvgBezierPath:
    paths = _load(ctx, svg_file)
    if not 0 <= index < len(paths):
        raise click.ClickException(
            f"Path index {index} out of range, {svg_file} contains {len(paths)} paths"
        )
    return paths[index]


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
@click.option(
    "--precision",
    type=click.Choice(["performance", "balanced", "quality"]),
    default="balanced",
    show_default=True,
    help="Calculation settings preset",
)
@click.option(
    "--toolkit",
    type=click.Choice([t.value for t in Toolkit]),
    default=DEFAULT_TOOLKIT.value,
    show_default=True,
    help="Coordinate convention for slopes and angles",
)
@click.version_option(package_name="bezier-superpowers")
@click.pass_context
def main(ctx: click.Context, verbose: bool, precision: str, toolkit: str) -> None:
    """Measure lengths, points, tangents and closest points of SVG paths."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["settings"] = CalculationSettings.preset(precision)
    ctx.obj["toolkit"] = Toolkit(toolkit)


@main.command()
@_svg_file
@_index
@click.pass_context
def length(ctx: click.Context, svg_file: Path, index: int) -> None:
    """Print the length of a path."""
    click.echo(f"{_select(ctx, svg_file, index).length:g}")


@main.command()
@_svg_file
@click.argument("fraction", type=float)
@_index
@click.pass_context
def point(ctx: click.Context, svg_file: Path, fraction: float, index: int) -> None:
    """Print the point at FRACTION of the length of a path."""
    p = _select(ctx, svg_file, index).point_at_fraction(fraction)
    click.echo(f"{p.x:g} {p.y:g}")


@main.command()
@_svg_file
@click.argument("fraction", type=float)
@_index
@click.pass_context
def tangent(ctx: click.Context, svg_file: Path, fraction: float, index: int) -> None:
    """Print slope and tangent angle (degrees) at FRACTION of the length of a path."""
    path = _select(ctx, svg_file, index)
    slope = path.slope_at_fraction(fraction)
    angle = math.degrees(path.tangent_angle_at_fraction(fraction))
    click.echo(f"slope {slope:g}")
    click.echo(f"angle {angle:g}")


@main.command()
@_svg_file
@click.argument("x", type=float)
@click.argument("y", type=float)
@_index
@click.pass_context
def perpendicular(
    ctx: click.Context, svg_file: Path, x: float, y: float, index: int
) -> None:
    """Print the point of a path closest to (X, Y) and its distance."""
    path = _select(ctx, svg_file, index)
    target = Point(x, y)
    foot = path.perpendicular_point(target)
    click.echo(f"{foot.x:g} {foot.y:g}")
    click.echo(f"distance {foot.distance_to(target):g}")


@main.command()
@_svg_file
@click.pass_context
def paths(ctx: click.Context, svg_file: Path) -> None:
    """List all paths of an SVG file with their length and bounds."""
    for idx, path in enumerate(_load(ctx, svg_file)):
        b = path.bounds
        ident = path.svg_attributes.get("id", "-")
        click.echo(
            f"{idx}\t{ident}\tlength {path.length:g}\t"
            f"bounds {b.x:g} {b.y:g} {b.width:g} {b.height:g}"
        )
