"""
Domain models (Pydantic).

These types are the "contract" between the numeric core and its consumers:
- input points (`GeoPoint`, `Place`) validated at the CLI/config boundary,
- the discriminated outcome of a distance computation (`DistanceResult`).

The numeric core itself works on plain floats and never validates ranges.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

# Value returned by the legacy API whenever a computation fails.
FAILURE_SENTINEL = -1.0

FailureKind = Literal["computation", "no_convergence"]


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def __str__(self) -> str:
        return f"{{{self.lat:.6f},{self.lon:.6f}}}"


class Place(BaseModel):
    """A named point (e.g. an airport) used by the CLI demo."""

    code: str
    label: str = ""
    location: GeoPoint


class DistanceResult(BaseModel):
    """Outcome of one method between two points: either a distance or a named failure."""

    method: str
    unit: Literal["km", "mi"]
    distance: float | None = Field(default=None, ge=0)
    failure: FailureKind | None = None
    message: str | None = None
    fallback_method: str | None = None

    @model_validator(mode="after")
    def _validate_outcome(self) -> "DistanceResult":
        if (self.distance is None) == (self.failure is None):
            raise ValueError("DistanceResult needs exactly one of distance or failure")
        return self

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def legacy_value(self) -> float:
        """The distance, or -1 when the computation failed (any failure kind)."""
        return self.distance if self.distance is not None else FAILURE_SENTINEL
