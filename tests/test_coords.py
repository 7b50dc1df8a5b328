"""Tests for celestialexplorer.coords: fly-to coordinate validation."""

import pytest

from celestialexplorer.coords import validate
from celestialexplorer.errors import CoordinateErrorKind, InvalidCoordinateInput
from celestialexplorer.models import LatLng


@pytest.mark.parametrize(
    ("lat_text", "lng_text", "expected"),
    [
        ("41.15", "20.16", LatLng(41.15, 20.16)),
        ("-60", "180", LatLng(-60.0, 180.0)),
        ("85", "-180", LatLng(85.0, -180.0)),
        ("+12.5", " 7 ", LatLng(12.5, 7.0)),
        (".5", "-0.25", LatLng(0.5, -0.25)),
        ("0.", "0", LatLng(0.0, 0.0)),
        (41.15, 20.16, LatLng(41.15, 20.16)),
    ],
)
def test_valid_coordinates_round_trip(lat_text, lng_text, expected):
    assert validate(lat_text, lng_text) == expected


@pytest.mark.parametrize(
    ("lat_text", "lng_text"),
    [
        ("abc", "0"),
        ("", "10"),
        ("10", "   "),
        ("1e3", "0"),
        ("41,15", "20"),
        ("nan", "0"),
        ("inf", "0"),
        ("12.5.1", "0"),
        ("--5", "0"),
        (float("nan"), 0),
        (0, float("inf")),
        ("9" * 400, "0"),
        ("0", "-" + "9" * 400),
        (10**400, 0),
    ],
)
def test_not_a_number(lat_text, lng_text):
    with pytest.raises(InvalidCoordinateInput) as exc:
        validate(lat_text, lng_text)
    assert exc.value.kind is CoordinateErrorKind.NOT_A_NUMBER


@pytest.mark.parametrize("lat_text", ["90", "85.0001", "-60.01", "-90"])
def test_latitude_out_of_range(lat_text):
    with pytest.raises(InvalidCoordinateInput) as exc:
        validate(lat_text, "0")
    assert exc.value.kind is CoordinateErrorKind.LATITUDE_OUT_OF_RANGE


@pytest.mark.parametrize("lng_text", ["180.5", "-181", "360"])
def test_longitude_out_of_range(lng_text):
    with pytest.raises(InvalidCoordinateInput) as exc:
        validate("10", lng_text)
    assert exc.value.kind is CoordinateErrorKind.LONGITUDE_OUT_OF_RANGE


def test_latitude_reported_before_longitude():
    with pytest.raises(InvalidCoordinateInput) as exc:
        validate("90", "200")
    assert exc.value.kind is CoordinateErrorKind.LATITUDE_OUT_OF_RANGE


def test_parse_failure_wins_over_range():
    with pytest.raises(InvalidCoordinateInput) as exc:
        validate("90", "east")
    assert exc.value.kind is CoordinateErrorKind.NOT_A_NUMBER
