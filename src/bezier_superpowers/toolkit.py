# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""
Coordinate conventions of the two UI toolkit families.

Mobile toolkits place the origin at the top left with the y axis pointing
down, desktop toolkits place it at the bottom left with the y axis pointing
up. Exactly one of them is selected for a process, based on
:data:`IS_MOBILE`.
"""

from __future__ import annotations

import sys
from enum import Enum
from typing import Final

_MOBILE_PLATFORMS: Final = frozenset({"ios", "tvos", "watchos"})

IS_MOBILE: Final = sys.platform in _MOBILE_PLATFORMS


class Toolkit(Enum):
    """UI toolkit family whose coordinate system path measurements follow."""

    UIKIT = "uikit"
    APPKIT = "appkit"

    @property
    def flipped(self) -> bool:
        """``True`` if the y axis points down."""
        return self is Toolkit.UIKIT

    @property
    def y_sign(self) -> float:
        """Factor that maps a toolkit y delta to a cartesian one."""
        return -1.0 if self.flipped else 1.0


def select_toolkit(mobile: bool) -> Toolkit:
    """
    Select the toolkit for a platform.

    :param mobile: Platform identification flag.
    :return: :attr:`Toolkit.UIKIT` for mobile platforms, otherwise
             :attr:`Toolkit.APPKIT`.
    """
    return Toolkit.UIKIT if mobile else Toolkit.APPKIT


DEFAULT_TOOLKIT: Final = select_toolkit(IS_MOBILE)
