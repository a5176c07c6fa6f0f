"""
GeoDistance CLI entrypoint.

This CLI is intended for quick local demos and comparisons of the four methods.
It delegates all math to `geodistance.distance`.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from geodistance.config.settings import Settings, get_settings
from geodistance.core.errors import GeoDistanceError
from geodistance.core.logging import configure_logging
from geodistance.core.units import UnitSystem
from geodistance.distance import METHODS, compare_methods, distance_between
from geodistance.domain.models import GeoPoint, Place
from geodistance.report import one_line_summary, render_comparison


def _resolve_point(args: argparse.Namespace, prefix: str, code: str, settings: Settings) -> Place:
    """Turn `--from JFK` or `--from-lat/--from-lon` style arguments into a `Place`."""
    name = getattr(args, f"{prefix}_place")
    lat = getattr(args, f"{prefix}_lat")
    lon = getattr(args, f"{prefix}_lon")

    if name:
        if lat is not None or lon is not None:
            raise ValueError(f"Use either --{prefix} or --{prefix}-lat/--{prefix}-lon, not both")
        return settings.get_place(name)
    if lat is None or lon is None:
        raise ValueError(f"--{prefix} or both --{prefix}-lat and --{prefix}-lon are required")
    return Place(code=code, location=GeoPoint(lat=lat, lon=lon))


def _places_payload(start: Place, end: Place) -> dict[str, Any]:
    return {"from": start.model_dump(mode="json"), "to": end.model_dump(mode="json")}


def _cmd_distance(args: argparse.Namespace) -> int:
    """Handle the `distance` subcommand."""
    settings = get_settings()
    start = _resolve_point(args, "from", "A", settings)
    end = _resolve_point(args, "to", "B", settings)
    unit = UnitSystem.parse(args.unit or settings.app.default_unit)

    result = distance_between(args.method, start.location, end.location, unit, settings=settings)

    if args.json:
        payload = {**_places_payload(start, end), "result": result.model_dump(mode="json")}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(one_line_summary(result))
    return 0 if result.ok else 1


def _cmd_compare(args: argparse.Namespace) -> int:
    """Handle the `compare` subcommand."""
    settings = get_settings()
    start = _resolve_point(args, "from", "A", settings)
    end = _resolve_point(args, "to", "B", settings)
    units = [UnitSystem.parse(args.unit)] if args.unit else [UnitSystem.SI, UnitSystem.US]

    results_by_unit = {
        unit: compare_methods(
            start.location.lat,
            start.location.lon,
            end.location.lat,
            end.location.lon,
            unit,
            settings=settings,
        )
        for unit in units
    }

    if args.json:
        payload = {
            **_places_payload(start, end),
            "results": {
                unit.symbol: [r.model_dump(mode="json") for r in results]
                for unit, results in results_by_unit.items()
            },
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(render_comparison(start, end, results_by_unit))

    all_ok = all(r.ok for results in results_by_unit.values() for r in results)
    return 0 if all_ok else 1


def _cmd_places(_: argparse.Namespace) -> int:
    settings = get_settings()
    for code, place in settings.places.items():
        print(f"{code:<6} {place.location}  {place.label}")
    return 0


def _add_point_arguments(parser: argparse.ArgumentParser) -> None:
    for prefix in ("from", "to"):
        parser.add_argument(f"--{prefix}", dest=f"{prefix}_place", default=None, help="Named place (see `places`)")
        parser.add_argument(f"--{prefix}-lat", dest=f"{prefix}_lat", type=float, default=None)
        parser.add_argument(f"--{prefix}-lon", dest=f"{prefix}_lon", type=float, default=None)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the GeoDistance CLI."""
    parser = argparse.ArgumentParser(prog="geodistance")
    sub = parser.add_subparsers(dest="command", required=True)

    dist = sub.add_parser("distance", help="Distance between two points with one method.")
    _add_point_arguments(dist)
    dist.add_argument("--method", choices=list(METHODS), default="haversine")
    dist.add_argument("--unit", choices=["km", "mi"], default=None, help="Defaults to app.default_unit")
    dist.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    dist.set_defaults(func=_cmd_distance)

    cmp_ = sub.add_parser("compare", help="Compare all four methods between two points.")
    _add_point_arguments(cmp_)
    cmp_.add_argument("--unit", choices=["km", "mi"], default=None, help="Omit to print both km and miles")
    cmp_.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    cmp_.set_defaults(func=_cmd_compare)

    places = sub.add_parser("places", help="List named places from the configuration.")
    places.set_defaults(func=_cmd_places)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geodistance.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except (GeoDistanceError, ValueError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main())
