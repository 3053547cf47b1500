# This file is part of bezier-superpowers.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar


class LengthPrecision(IntEnum):
    """
    Number of polyline samples used to measure a curved segment.

    Higher precision is more expensive to compute.
    """

    LOW = 50
    NORMAL = 100
    HIGH = 150


class PerpendicularPrecision(float, Enum):
    """
    Distance between two samples of the perpendicular lookup table.

    Smaller steps find closer points and cost more.
    """

    LOW = 15.0
    NORMAL = 5.0
    HIGH = 2.0


@dataclass(frozen=True)
class CalculationSettings:
    """
    Precision used by the path measurements.

    :ivar length_precision: Samples per curved segment for length measurement.
    :ivar perpendicular_precision: Step of the closest-point lookup table.
    """

    length_precision: LengthPrecision
    perpendicular_precision: PerpendicularPrecision

    BEST_PERFORMANCE: ClassVar[CalculationSettings]
    BALANCED: ClassVar[CalculationSettings]
    BEST_QUALITY: ClassVar[CalculationSettings]

    @staticmethod
    def preset(name: str) -> CalculationSettings:
        """
        Look up a preset by its short name.

        :param name: One of ``performance``, ``balanced`` or ``quality``.
        :raises ValueError: For unknown names.
        """
        presets = {
            "performance": CalculationSettings.BEST_PERFORMANCE,
            "balanced": CalculationSettings.BALANCED,
            "quality": CalculationSettings.BEST_QUALITY,
        }
        try:
            return presets[name]
        except KeyError:
            raise ValueError(f"Unknown calculation preset: {name!r}") from None


CalculationSettings.BEST_PERFORMANCE = CalculationSettings(
    LengthPrecision.LOW, PerpendicularPrecision.LOW
)
CalculationSettings.BALANCED = CalculationSettings(
    LengthPrecision.NORMAL, PerpendicularPrecision.NORMAL
)
CalculationSettings.BEST_QUALITY = CalculationSettings(
    LengthPrecision.HIGH, PerpendicularPrecision.HIGH
)
