import json
import logging

import pytest

from geodistance.cli import main


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # `main()` points the root handler at the captured stderr; undo that after each test.
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_compare_prints_demo_table(capsys):
    code = main(["compare", "--from", "JFK", "--to", "LHR"])
    out = capsys.readouterr().out

    assert code == 0
    assert "JFK {40.641766,-73.780968} to LHR {51.470020,-0.454295}" in out
    assert "Haversine                  : 5540.1754" in out
    assert "Inverse Vincenty           : 5555.0656" in out
    assert "(highest accuracy)" in out
    assert "miles ---" in out
    assert "Spherical Earth Projection : 3594.5755" in out


def test_compare_json_single_unit(capsys):
    code = main(["compare", "--from", "jfk", "--to", "lax", "--unit", "mi", "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["from"]["code"] == "JFK"
    assert list(payload["results"]) == ["mi"]
    methods = [r["method"] for r in payload["results"]["mi"]]
    assert methods == ["haversine", "slc", "vincenty", "sep"]
    vincenty = payload["results"]["mi"][2]
    assert vincenty["distance"] == pytest.approx(3982.910407 / 1.609344, abs=1e-3)


def test_distance_with_raw_coordinates(capsys):
    code = main(
        [
            "distance",
            "--from-lat", "40.641766", "--from-lon", "-73.780968",
            "--to-lat", "51.470020", "--to-lon", "-0.454295",
            "--method", "sep",
        ]
    )
    out = capsys.readouterr().out.strip()

    assert code == 0
    assert out.startswith("sep: 5784.9085")
    assert out.endswith(" km")


def test_distance_default_unit_from_settings(monkeypatch, capsys):
    monkeypatch.setenv("GEODISTANCE_DEFAULT_UNIT", "mi")
    code = main(["distance", "--from", "JFK", "--to", "LHR", "--json"])
    payload = json.loads(capsys.readouterr().out)

    assert code == 0
    assert payload["result"]["unit"] == "mi"
    assert payload["result"]["distance"] == pytest.approx(3442.505405, abs=1e-3)


def test_distance_reports_non_convergence_with_exit_code_1(capsys):
    code = main(
        [
            "distance",
            "--from-lat", "0", "--from-lon", "0",
            "--to-lat", "0.5", "--to-lon", "179.7",
            "--method", "vincenty",
        ]
    )
    out = capsys.readouterr().out

    assert code == 1
    assert "vincenty: failed (no_convergence)" in out


def test_places_lists_configured_airports(capsys):
    assert main(["places"]) == 0
    out = capsys.readouterr().out
    assert "JFK" in out and "LAX" in out and "LHR" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["compare", "--from", "NOWHERE", "--to", "LHR"],
        ["compare", "--from", "JFK"],
        ["distance", "--from", "JFK", "--from-lat", "1", "--to", "LHR"],
        ["distance", "--from-lat", "95", "--from-lon", "0", "--to", "LHR"],
    ],
)
def test_usage_errors_exit_with_code_2(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
