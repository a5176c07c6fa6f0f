"""
Small text formatting helpers.

Used by the CLI to print single results and the side-by-side comparison table of all
methods, in the layout of the classic demo printout.
"""

from __future__ import annotations

from geodistance.core.units import UnitSystem
from geodistance.distance import get_method
from geodistance.domain.models import DistanceResult, Place

RULE_WIDTH = 79
_UNIT_HEADINGS = {UnitSystem.SI: "km", UnitSystem.US: "miles"}


def format_value(result: DistanceResult) -> str:
    """Render the distance (or the failure kind) of one result."""
    if not result.ok:
        return f"failed ({result.failure})"
    text = f"{result.distance:.6f}"
    if result.fallback_method:
        text += f" [fallback: {result.fallback_method}]"
    return text


def one_line_summary(result: DistanceResult) -> str:
    """Render a compact single-line summary for a result."""
    line = f"{result.method}: {format_value(result)}"
    if result.ok:
        return f"{line} {result.unit}"
    return f"{line}: {result.message}"


def _section(unit: UnitSystem, results: list[DistanceResult]) -> list[str]:
    heading = _UNIT_HEADINGS[unit]
    lines = [f"{heading} " + "-" * (RULE_WIDTH - len(heading) - 1)]
    width = max(len(get_method(r.method).label) for r in results)
    for r in results:
        method = get_method(r.method)
        lines.append(f"{method.label:<{width}} : {format_value(r)} ({method.accuracy} accuracy)")
    return lines


def render_comparison(
    start: Place, end: Place, results_by_unit: dict[UnitSystem, list[DistanceResult]]
) -> str:
    """Render the multi-method comparison table between two places."""
    lines = [
        "=" * RULE_WIDTH,
        "Great-circle (orthodromic) distance between two geo-points:",
        f"{start.code} {start.location} to {end.code} {end.location}",
    ]
    for unit, results in results_by_unit.items():
        if results:
            lines.extend(_section(unit, results))
    lines.append("=" * RULE_WIDTH)
    return "\n".join(lines)
