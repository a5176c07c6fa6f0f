import math

import pytest

from geodistance.algorithms.vincenty import WGS84, Ellipsoid, solve_inverse, vincenty_km
from geodistance.core.errors import NoConvergenceError

JFK = (40.641766, -73.780968)
LAX = (33.942791, -118.410042)
LHR = (51.470020, -0.454295)


def test_wgs84_constants():
    assert WGS84.a == 6378137.0
    assert WGS84.f == pytest.approx(1 / 298.257223563)
    assert WGS84.b == pytest.approx(6356752.314245, abs=1e-6)


def test_jfk_lhr_reference_distance():
    assert vincenty_km(*JFK, *LHR) == pytest.approx(5555.065686, abs=1e-3)


def test_jfk_lax_reference_distance():
    assert vincenty_km(*JFK, *LAX) == pytest.approx(3982.910407, abs=1e-3)


def test_converges_quickly_for_ordinary_pairs():
    solution = solve_inverse(*JFK, *LHR)
    assert not solution.coincident
    assert 1 <= solution.iterations <= 10
    assert solution.distance_km == pytest.approx(solution.distance_m / 1000)


def test_symmetric():
    forward = vincenty_km(*JFK, *LAX)
    backward = vincenty_km(*LAX, *JFK)
    assert forward == pytest.approx(backward, rel=1e-9)


def test_coincident_points_short_circuit_to_exact_zero():
    solution = solve_inverse(*JFK, *JFK)
    assert solution.coincident
    assert solution.distance_m == 0.0
    assert solution.iterations == 1
    assert vincenty_km(90, 0, 90, 0) == 0.0


def test_equatorial_line_uses_semi_major_axis():
    # Along the equator the geodesic is a circle of radius a.
    assert vincenty_km(0, 0, 0, 90) == pytest.approx(WGS84.a * math.pi / 2 / 1000, abs=1e-6)


def test_near_antipodal_points_raise_no_convergence_within_bound():
    with pytest.raises(NoConvergenceError) as excinfo:
        solve_inverse(0, 0, 0.5, 179.7)
    assert excinfo.value.iterations == 100
    assert "No convergence after 100 iterations" in str(excinfo.value)


def test_iteration_limit_is_honoured():
    with pytest.raises(NoConvergenceError) as excinfo:
        solve_inverse(*JFK, *LHR, max_iterations=1)
    assert excinfo.value.iterations == 1


def test_rejects_non_positive_iteration_limit():
    with pytest.raises(ValueError, match="max_iterations"):
        solve_inverse(*JFK, *LHR, max_iterations=0)


def test_sphere_matches_spherical_distance():
    sphere = Ellipsoid(a=6371009.0, f=0.0)
    solution = solve_inverse(0, 0, 0, 90, ellipsoid=sphere)
    assert solution.distance_km == pytest.approx(math.pi / 2 * 6371.009, rel=1e-12)
