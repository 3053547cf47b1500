# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from typing import Final

from .elements import ClosePath as ClosePath
from .elements import CurveTo as CurveTo
from .elements import LineTo as LineTo
from .elements import MoveTo as MoveTo
from .elements import PathElement as PathElement
from .elements import QuadCurveTo as QuadCurveTo
from .geometry import AffineTransform as AffineTransform
from .geometry import Point as Point
from .geometry import Rect as Rect
from .path import BezierPath as BezierPath
from .path_parser import PathParser as PathParser
from .settings import CalculationSettings as CalculationSettings
from .settings import LengthPrecision as LengthPrecision
from .settings import PerpendicularPrecision as PerpendicularPrecision
from .svg_engine import SvgBezierPath as SvgBezierPath
from .svg_engine import SvgParseError as SvgParseError
from .svg_engine import paths_from_svg as paths_from_svg
from .svg_engine import paths_from_svg_file as paths_from_svg_file
from .toolkit import IS_MOBILE as IS_MOBILE
from .toolkit import Toolkit as Toolkit
from .toolkit import select_toolkit as select_toolkit

__version__: Final = "1.0.0"
version_number: Final = 1.0
version_string: Final = (
    b"@(#)PROGRAM:bezier_superpowers  PROJECT:bezier-superpowers-" + __version__.encode() + b"\n"
)
