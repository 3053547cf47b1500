# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

import dataclasses

import pytest

from bezier_superpowers.settings import (
    CalculationSettings,
    LengthPrecision,
    PerpendicularPrecision,
)


def test_precision_values() -> None:
    assert [p.value for p in LengthPrecision] == [50, 100, 150]
    assert [p.value for p in PerpendicularPrecision] == [15, 5, 2]


@pytest.mark.parametrize(
    "settings, length, perpendicular",
    [
        (CalculationSettings.BEST_PERFORMANCE, 50, 15),
        (CalculationSettings.BALANCED, 100, 5),
        (CalculationSettings.BEST_QUALITY, 150, 2),
    ],
)
def test_presets(
    settings: CalculationSettings, length: int, perpendicular: float
) -> None:
    """Presets pair length and perpendicular precision of the same level."""
    assert settings.length_precision == length
    assert settings.perpendicular_precision == perpendicular


def test_preset_lookup() -> None:
    assert CalculationSettings.preset("quality") is CalculationSettings.BEST_QUALITY
    with pytest.raises(ValueError, match="Unknown calculation preset"):
        CalculationSettings.preset("fastest")


def test_settings_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        CalculationSettings.BALANCED.length_precision = LengthPrecision.HIGH  # type: ignore[misc]
