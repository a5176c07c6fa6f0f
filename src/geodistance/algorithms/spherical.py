"""
Spherical-Earth distance formulas.

Each function maps two points (decimal degrees) to a central angle in radians; the
distance is that angle times the mean Earth radius. Plain floats in, plain floats out:
input checks and unit conversion live in `geodistance.distance`.

Accuracy, best to worst for general use:
- Haversine: stable for both tiny and near-antipodal separations.
- Spherical Law of Cosines: same angle as Haversine, but `acos` near 1.0 loses precision
  through cancellation, so very short distances (metres) come out noticeably off.
  Prefer Haversine there.
- Spherical Earth Projection: equirectangular (flat) approximation, fine within a city
  or small region, increasingly wrong over long distances. Mostly didactic.
"""

from __future__ import annotations

import math

from geodistance.core.units import DEG_TO_RAD, MEAN_EARTH_RADIUS_KM


def haversine_central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = lat1 * DEG_TO_RAD
    phi2 = lat2 * DEG_TO_RAD

    a = math.sin((phi2 - phi1) / 2) ** 2
    b = math.sin((lon2 - lon1) / 2 * DEG_TO_RAD) ** 2 * math.cos(phi1) * math.cos(phi2)

    # Rounding can push the sum a hair above 1.0 for antipodal points. NaN passes through.
    h = a + b
    if h > 1.0:
        h = 1.0
    return 2 * math.asin(math.sqrt(h))


def slc_central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = lat1 * DEG_TO_RAD
    phi2 = lat2 * DEG_TO_RAD
    dlon = (lon1 - lon2) * DEG_TO_RAD

    cos_angle = math.sin(phi1) * math.sin(phi2) + math.cos(phi1) * math.cos(phi2) * math.cos(dlon)
    # Clamp only keeps acos in its domain (NaN passes through); the small-distance
    # cancellation is left as is.
    if cos_angle > 1.0:
        cos_angle = 1.0
    elif cos_angle < -1.0:
        cos_angle = -1.0
    return math.acos(cos_angle)


def sep_central_angle(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1 = lat1 * DEG_TO_RAD
    phi2 = lat2 * DEG_TO_RAD

    x = (lon2 - lon1) * math.cos((phi1 + phi2) / 2) * DEG_TO_RAD
    y = (lat2 - lat1) * DEG_TO_RAD
    return math.sqrt(x * x + y * y)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers using the Haversine formula."""
    return haversine_central_angle(lat1, lon1, lat2, lon2) * MEAN_EARTH_RADIUS_KM


def slc_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers using the Spherical Law of Cosines."""
    return slc_central_angle(lat1, lon1, lat2, lon2) * MEAN_EARTH_RADIUS_KM


def sep_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Approximate distance in kilometers using the Spherical Earth Projection."""
    return sep_central_angle(lat1, lon1, lat2, lon2) * MEAN_EARTH_RADIUS_KM
