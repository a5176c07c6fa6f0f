"""
Shared constants and unit handling.

All four distance methods work in kilometers internally and convert at the very end,
so unit selection never leaks into the math.
"""

from __future__ import annotations

import math
from enum import IntEnum

# Earth mean radius, km
MEAN_EARTH_RADIUS_KM = 6371.009
# Conversion factor: mile to km
MI_TO_KM = 1.609344
# Conversion factor: degree to radian
DEG_TO_RAD = math.pi / 180.0


class UnitSystem(IntEnum):
    """Output unit selector: SI (kilometers) or US (miles)."""

    SI = 0
    US = 1

    @property
    def symbol(self) -> str:
        return "km" if self is UnitSystem.SI else "mi"

    @classmethod
    def parse(cls, value: "UnitSystem | float | str") -> "UnitSystem":
        """Coerce a selector into a `UnitSystem`.

        Numbers (ints, floats, bools) follow the classic contract: zero selects kilometers,
        anything else miles.
        Strings accept `km`/`si`/`kilometers` and `mi`/`us`/`miles` (case-insensitive).
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, (int, float)):
            return cls.SI if value == 0 else cls.US
        key = str(value).strip().lower()
        if key in {"km", "si", "kilometer", "kilometers"}:
            return cls.SI
        if key in {"mi", "us", "mile", "miles"}:
            return cls.US
        raise ValueError(f"Unknown unit '{value}', expected km or mi")


def convert_km(distance_km: float, unit: UnitSystem | float | str = UnitSystem.SI) -> float:
    """Express a distance in kilometers in the requested unit."""
    if UnitSystem.parse(unit) is UnitSystem.SI:
        return distance_km
    return distance_km / MI_TO_KM
