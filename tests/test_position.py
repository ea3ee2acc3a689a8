#!/usr/bin/env -S uv run
# /// script
# requires-python = ">=3.10"
# dependencies = []
# ///
"""Test position resolution for QSO groups."""

import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from qsomap.aggregate import aggregate_qsos
from qsomap.geo_utils import GeoPoint
from qsomap.position import SOURCE_LATLON, parse_coordinate, resolve_position


def test_grid_beats_latlon():
    qso = {"GRIDSQUARE": "FN20", "LAT": "51.5", "LON": "-0.1"}
    pos = resolve_position(qso)
    assert pos.point == GeoPoint(40.5, -75.0)
    assert pos.source == "Grid Center (FN20)"


def test_six_char_grid_label():
    pos = resolve_position({"GRIDSQUARE": "fn20ab"})
    assert pos.source == "Grid Center (FN20AB)"


def test_latlon_fallback():
    pos = resolve_position({"LAT": "40.5", "LON": "-74.25"})
    assert pos.point == GeoPoint(40.5, -74.25)
    assert pos.source == SOURCE_LATLON


def test_invalid_grid_falls_through():
    pos = resolve_position({"GRIDSQUARE": "FN", "LAT": "40.5", "LON": "-74.25"})
    assert pos.source == "LAT/LON"
    pos = resolve_position({"GRIDSQUARE": "XX99", "LAT": "40.5", "LON": "-74.25"})
    assert pos.source == "LAT/LON"


def test_zero_coordinate_counts_as_missing():
    assert resolve_position({"LAT": "0", "LON": "-74.25"}) is None
    assert resolve_position({"LAT": "51.5", "LON": "0.0"}) is None
    # A grid still maps a station on the prime meridian
    assert resolve_position({"GRIDSQUARE": "JJ00", "LAT": "0", "LON": "0"}) is not None


def test_out_of_range_latlon_rejected():
    assert resolve_position({"LAT": "200", "LON": "-74.25"}) is None
    assert resolve_position({"LAT": "N091 00.000", "LON": "W074 15.000"}) is None
    assert resolve_position({"LAT": "40.5", "LON": "E181 00.000"}) is None
    assert resolve_position({"LAT": "-90", "LON": "180"}).source == "LAT/LON"


def test_no_position():
    assert resolve_position({}) is None
    assert resolve_position({"LAT": "40.5"}) is None
    assert resolve_position({"LAT": "NORTH", "LON": "WEST"}) is None


def test_resolve_group():
    group = aggregate_qsos([{"CALL": "W1AW", "GRIDSQUARE": "FN31"}])[0]
    assert resolve_position(group).source == "Grid Center (FN31)"


def test_parse_coordinate_decimal():
    assert parse_coordinate("40.5") == 40.5
    assert parse_coordinate(" -74.25 ") == -74.25
    assert parse_coordinate("0") == 0.0


def test_parse_coordinate_adif_location():
    assert parse_coordinate("N040 30.000") == 40.5
    assert parse_coordinate("W074 15.000") == -74.25
    assert parse_coordinate("S033 52.200") == -(33 + 52.2 / 60)
    assert parse_coordinate("E151 30") == 151.5


def test_parse_coordinate_invalid():
    for value in [None, "", "abc", "nan", "inf", "N040", "X040 30.000"]:
        assert parse_coordinate(value) is None, f"{value!r} should not parse"


if __name__ == "__main__":
    test_grid_beats_latlon()
    test_six_char_grid_label()
    test_latlon_fallback()
    test_invalid_grid_falls_through()
    test_zero_coordinate_counts_as_missing()
    test_out_of_range_latlon_rejected()
    test_no_position()
    test_resolve_group()
    test_parse_coordinate_decimal()
    test_parse_coordinate_adif_location()
    test_parse_coordinate_invalid()
    print("✅ ALL TESTS PASSED!")
