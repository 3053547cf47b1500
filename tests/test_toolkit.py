# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import sys

import bezier_superpowers
from bezier_superpowers.toolkit import (
    DEFAULT_TOOLKIT,
    IS_MOBILE,
    Toolkit,
    select_toolkit,
)


def test_version_symbols() -> None:
    """Version constants are present once the package is imported."""
    assert bezier_superpowers.__version__ == "1.0.0"
    assert bezier_superpowers.version_number == 1.0
    assert isinstance(bezier_superpowers.version_string, bytes)
    assert bezier_superpowers.version_string.startswith(b"@(#)PROGRAM:")
    assert bezier_superpowers.version_string.endswith(b"bezier-superpowers-1.0.0\n")


def test_select_toolkit() -> None:
    """Exactly one toolkit is selected per platform flag."""
    assert select_toolkit(True) is Toolkit.UIKIT
    assert select_toolkit(False) is Toolkit.APPKIT
    assert select_toolkit(True) is not select_toolkit(False)


def test_default_toolkit() -> None:
    """The default toolkit follows the platform of the interpreter."""
    assert IS_MOBILE == (sys.platform in ("ios", "tvos", "watchos"))
    assert DEFAULT_TOOLKIT is select_toolkit(IS_MOBILE)


def test_toolkit_orientation() -> None:
    assert Toolkit.UIKIT.flipped
    assert Toolkit.UIKIT.y_sign == -1
    assert not Toolkit.APPKIT.flipped
    assert Toolkit.APPKIT.y_sign == 1
