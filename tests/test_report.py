from geodistance.core.units import UnitSystem
from geodistance.domain.models import DistanceResult, GeoPoint, Place
from geodistance.report import format_value, one_line_summary, render_comparison


def test_format_value_variants():
    ok = DistanceResult(method="haversine", unit="km", distance=12.3456789)
    fallback = ok.model_copy(update={"method": "vincenty", "fallback_method": "haversine"})
    failed = DistanceResult(method="vincenty", unit="km", failure="no_convergence", message="boom")

    assert format_value(ok) == "12.345679"
    assert format_value(fallback) == "12.345679 [fallback: haversine]"
    assert format_value(failed) == "failed (no_convergence)"
    assert one_line_summary(ok) == "haversine: 12.345679 km"
    assert one_line_summary(failed) == "vincenty: failed (no_convergence): boom"


def test_render_comparison_skips_empty_sections():
    start = Place(code="A", location=GeoPoint(lat=0, lon=0))
    end = Place(code="B", location=GeoPoint(lat=1.5, lon=-2))
    results = {
        UnitSystem.SI: [DistanceResult(method="sep", unit="km", distance=1.0)],
        UnitSystem.US: [],
    }

    text = render_comparison(start, end, results)

    lines = text.splitlines()
    assert lines[2] == "A {0.000000,0.000000} to B {1.500000,-2.000000}"
    assert lines[3].startswith("km ---")
    assert lines[4] == "Spherical Earth Projection : 1.000000 (lower accuracy)"
    assert "miles" not in text
    assert len(lines[0]) == 79
