"""
Inverse Vincenty solution on the WGS84 ellipsoid.

The inverse problem (distance between two known points) is solved by fixed-point
iteration on lambda, the longitude difference on the auxiliary sphere. It is the most
accurate method offered here (sub-millimetre on the ellipsoid) but it is not closed-form:
for nearly antipodal points lambda may never settle, in which case `NoConvergenceError`
is raised instead of returning a plausible-looking wrong number.

Callers that need a number regardless can configure a fallback method
(`vincenty.fallback_method` in settings); see `geodistance.distance`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from geodistance.core.errors import NoConvergenceError
from geodistance.core.units import DEG_TO_RAD

MAX_ITERATIONS = 100
TOLERANCE = 1e-12


@dataclass(frozen=True)
class Ellipsoid:
    """Reference ellipsoid: equatorial radius `a` (metres) and flattening `f`."""

    a: float
    f: float

    @property
    def b(self) -> float:
        """Polar radius, metres."""
        return self.a * (1.0 - self.f)


WGS84 = Ellipsoid(a=6378137.0, f=1.0 / 298.257223563)


@dataclass(frozen=True)
class InverseSolution:
    distance_m: float
    iterations: int
    sigma: float
    coincident: bool = False

    @property
    def distance_km(self) -> float:
        return self.distance_m / 1000.0


def solve_inverse(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    *,
    ellipsoid: Ellipsoid = WGS84,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> InverseSolution:
    """Solve the inverse geodesic problem between two points given in decimal degrees.

    Raises:
        NoConvergenceError: lambda did not settle within `max_iterations`.
        ValueError: `max_iterations` is not positive.
    """
    if max_iterations < 1:
        raise ValueError("max_iterations must be >= 1")

    a, f, b = ellipsoid.a, ellipsoid.f, ellipsoid.b
    dlon = (lon2 - lon1) * DEG_TO_RAD

    # Reduced latitudes (latitude on the auxiliary sphere)
    u1 = math.atan((1.0 - f) * math.tan(lat1 * DEG_TO_RAD))
    u2 = math.atan((1.0 - f) * math.tan(lat2 * DEG_TO_RAD))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    lam = dlon
    delta_lambda = math.inf
    for iteration in range(1, max_iterations + 1):
        sin_lam, cos_lam = math.sin(lam), math.cos(lam)
        term1 = cos_u2 * sin_lam
        term2 = cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam

        sin_sigma = math.sqrt(term1 * term1 + term2 * term2)
        if sin_sigma == 0.0:
            return InverseSolution(distance_m=0.0, iterations=iteration, sigma=0.0, coincident=True)

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
        sigma = math.atan2(sin_sigma, cos_sigma)

        sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
        cos2_alpha = 1.0 - sin_alpha * sin_alpha

        if cos2_alpha != 0.0:
            cos_2sigma_m = cos_sigma - 2.0 * sin_u1 * sin_u2 / cos2_alpha
        else:
            cos_2sigma_m = 0.0  # equatorial line

        u_sq = cos2_alpha * (a * a - b * b) / (b * b)
        big_a = 1.0 + u_sq / 16384.0 * (4096.0 + u_sq * (-768.0 + u_sq * (320.0 - 175.0 * u_sq)))
        big_b = u_sq / 1024.0 * (256.0 + u_sq * (-128.0 + u_sq * (74.0 - 47.0 * u_sq)))

        cos_2sigma_m_sq = cos_2sigma_m * cos_2sigma_m
        delta_sigma = big_b * sin_sigma * (
            cos_2sigma_m
            + big_b
            / 4.0
            * (
                cos_sigma * (-1.0 + 2.0 * cos_2sigma_m_sq)
                - big_b / 6.0 * cos_2sigma_m * (-3.0 + 4.0 * sin_sigma * sin_sigma) * (-3.0 + 4.0 * cos_2sigma_m_sq)
            )
        )

        c = f / 16.0 * cos2_alpha * (4.0 + f * (4.0 - 3.0 * cos2_alpha))
        lam_prev = lam
        lam = dlon + (1.0 - c) * f * sin_alpha * (
            sigma + c * sin_sigma * (cos_2sigma_m + c * cos_sigma * (-1.0 + 2.0 * cos_2sigma_m_sq))
        )

        delta_lambda = abs(lam - lam_prev)
        if delta_lambda < tolerance:
            break
    else:
        raise NoConvergenceError(iterations=max_iterations, delta_lambda=delta_lambda)

    distance_m = b * big_a * (sigma - delta_sigma)
    return InverseSolution(distance_m=distance_m, iterations=iteration, sigma=sigma)


def vincenty_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    *,
    max_iterations: int = MAX_ITERATIONS,
    tolerance: float = TOLERANCE,
) -> float:
    """Ellipsoidal (WGS84) distance in kilometers."""
    solution = solve_inverse(
        lat1, lon1, lat2, lon2, max_iterations=max_iterations, tolerance=tolerance
    )
    return solution.distance_km
