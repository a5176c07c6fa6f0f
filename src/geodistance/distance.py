"""
Distance methods: registry, result API and the legacy sentinel API.

Three layers, from strict to forgiving:
- `geodistance.algorithms.*`: raw math on floats (may raise, may propagate NaN).
- `compute_distance` / `compare_methods`: never raise on numeric trouble; every failure is a
  `DistanceResult` with a named kind (`computation` or `no_convergence`).
- `haversine` / `slc` / `vincenty` / `sep`: the classic contract, a float that is either the
  distance or -1. Note that -1 conflates generic arithmetic failure with Vincenty
  non-convergence; use `compute_distance` when the difference matters.

All functions here are thread-safe. The result API reads the cached, read-only `Settings`;
the sentinel functions ignore configuration entirely and stay pure.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from geodistance.algorithms.spherical import haversine_km, sep_km, slc_km
from geodistance.algorithms.vincenty import vincenty_km
from geodistance.config.settings import Settings, get_settings
from geodistance.core.errors import ComputationError, NoConvergenceError, UnknownMethodError
from geodistance.core.units import UnitSystem, convert_km
from geodistance.domain.models import DistanceResult, FailureKind, GeoPoint

logger = logging.getLogger(__name__)

# The sentinel functions are pure: packaged defaults only, no env, `.env` or YAML input.
_LEGACY_SETTINGS = Settings()


@dataclass(frozen=True)
class DistanceMethod:
    """One way of turning two points into a distance in kilometers."""

    name: str
    label: str
    accuracy: str
    compute_km: Callable[[float, float, float, float, Settings], float]


def _haversine(lat1: float, lon1: float, lat2: float, lon2: float, settings: Settings) -> float:
    return haversine_km(lat1, lon1, lat2, lon2)


def _slc(lat1: float, lon1: float, lat2: float, lon2: float, settings: Settings) -> float:
    return slc_km(lat1, lon1, lat2, lon2)


def _vincenty(lat1: float, lon1: float, lat2: float, lon2: float, settings: Settings) -> float:
    return vincenty_km(
        lat1,
        lon1,
        lat2,
        lon2,
        max_iterations=settings.vincenty.max_iterations,
        tolerance=settings.vincenty.tolerance,
    )


def _sep(lat1: float, lon1: float, lat2: float, lon2: float, settings: Settings) -> float:
    return sep_km(lat1, lon1, lat2, lon2)


# Registration order is the canonical order used by `compare_methods` and the CLI.
METHODS: dict[str, DistanceMethod] = {
    m.name: m
    for m in (
        DistanceMethod("haversine", "Haversine", "high", _haversine),
        DistanceMethod("slc", "Spherical Law of Cosines", "high", _slc),
        DistanceMethod("vincenty", "Inverse Vincenty", "highest", _vincenty),
        DistanceMethod("sep", "Spherical Earth Projection", "lower", _sep),
    )
}


def get_method(name: str) -> DistanceMethod:
    """Return a registered method by name (case-insensitive)."""
    method = METHODS.get(name.strip().lower())
    if method is None:
        raise UnknownMethodError(name, list(METHODS))
    return method


def _evaluate_km(method: DistanceMethod, coords: tuple[float, ...], settings: Settings) -> float:
    """Run one method with input/output sanity checks; raises `ComputationError` on trouble."""
    try:
        lat1, lon1, lat2, lon2 = (float(v) for v in coords)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ComputationError(f"Malformed coordinates {coords!r}: {exc}") from exc

    # `math` propagates NaN silently, so check explicitly instead of relying on exceptions.
    if not all(math.isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        raise ComputationError(f"Non-finite coordinates {coords!r}")

    try:
        km = method.compute_km(lat1, lon1, lat2, lon2, settings)
    except (ValueError, ArithmeticError) as exc:
        raise ComputationError(f"{method.name}: {exc}") from exc

    if not math.isfinite(km):
        raise ComputationError(f"{method.name}: non-finite result {km!r}")
    return km


def _failure(method: DistanceMethod, unit: UnitSystem, kind: FailureKind, exc: Exception) -> DistanceResult:
    logger.debug("%s failed (%s): %s", method.name, kind, exc)
    return DistanceResult(method=method.name, unit=unit.symbol, failure=kind, message=str(exc))


def compute_distance(
    method: str | DistanceMethod,
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: UnitSystem | float | str = UnitSystem.SI,
    *,
    settings: Settings | None = None,
) -> DistanceResult:
    """Compute the distance between two points (decimal degrees) with one method.

    Numeric failures never raise: they come back as `DistanceResult.failure`.
    If Vincenty does not converge and `vincenty.fallback_method` is configured, the
    fallback's distance is returned and recorded in `fallback_method`.

    Raises:
        UnknownMethodError: `method` is not registered.
        ValueError: `unit` cannot be parsed.
    """
    if settings is None:
        settings = get_settings()
    impl = get_method(method) if isinstance(method, str) else method
    unit = UnitSystem.parse(unit)

    try:
        km = _evaluate_km(impl, (lat1, lon1, lat2, lon2), settings)
    except NoConvergenceError as exc:
        fallback = settings.vincenty.fallback_method
        if fallback is None:
            return _failure(impl, unit, "no_convergence", exc)
        logger.warning("%s: %s; falling back to %s", impl.name, exc, fallback)
        result = compute_distance(fallback, lat1, lon1, lat2, lon2, unit, settings=settings)
        return result.model_copy(update={"method": impl.name, "fallback_method": fallback})
    except ComputationError as exc:
        return _failure(impl, unit, "computation", exc)

    return DistanceResult(method=impl.name, unit=unit.symbol, distance=convert_km(km, unit))


def distance_between(
    method: str | DistanceMethod,
    start: GeoPoint,
    end: GeoPoint,
    unit: UnitSystem | float | str = UnitSystem.SI,
    *,
    settings: Settings | None = None,
) -> DistanceResult:
    """Same as `compute_distance`, for validated `GeoPoint` inputs."""
    return compute_distance(method, start.lat, start.lon, end.lat, end.lon, unit, settings=settings)


def compare_methods(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: UnitSystem | float | str = UnitSystem.SI,
    *,
    settings: Settings | None = None,
) -> list[DistanceResult]:
    """Run every registered method on the same pair, in canonical order."""
    if settings is None:
        settings = get_settings()
    return [
        compute_distance(m, lat1, lon1, lat2, lon2, unit, settings=settings) for m in METHODS.values()
    ]


def haversine(
    lat1: float, lon1: float, lat2: float, lon2: float, unit: UnitSystem | float = UnitSystem.SI
) -> float:
    """Great-circle distance (km or miles) using the Haversine formula; -1 on failure.

    High accuracy on the sphere and numerically stable for short and long distances.
    """
    return compute_distance("haversine", lat1, lon1, lat2, lon2, unit, settings=_LEGACY_SETTINGS).legacy_value


def slc(
    lat1: float, lon1: float, lat2: float, lon2: float, unit: UnitSystem | float = UnitSystem.SI
) -> float:
    """Great-circle distance (km or miles) using the Spherical Law of Cosines; -1 on failure.

    Results match Haversine closely, except for very small separations where rounding
    inside `acos` degrades accuracy. Haversine is preferred there.
    """
    return compute_distance("slc", lat1, lon1, lat2, lon2, unit, settings=_LEGACY_SETTINGS).legacy_value


def vincenty(
    lat1: float, lon1: float, lat2: float, lon2: float, unit: UnitSystem | float = UnitSystem.SI
) -> float:
    """Ellipsoidal (WGS84) distance (km or miles) using Inverse Vincenty; -1 on failure.

    Highest accuracy, but iterative: near-antipodal points may not converge, which also
    yields -1. No fallback is applied here; use `compute_distance` for that.
    """
    return compute_distance("vincenty", lat1, lon1, lat2, lon2, unit, settings=_LEGACY_SETTINGS).legacy_value


def sep(
    lat1: float, lon1: float, lat2: float, lon2: float, unit: UnitSystem | float = UnitSystem.SI
) -> float:
    """Approximate distance (km or miles) using the Spherical Earth Projection; -1 on failure.

    Low accuracy; suitable for short, regional distances.
    """
    return compute_distance("sep", lat1, lon1, lat2, lon2, unit, settings=_LEGACY_SETTINGS).legacy_value
