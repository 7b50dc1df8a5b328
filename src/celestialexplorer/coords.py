"""Fly-to coordinate validation."""

import math
import re

from celestialexplorer.errors import CoordinateErrorKind, InvalidCoordinateInput
from celestialexplorer.models import LatLng

LAT_MIN, LAT_MAX = -60.0, 85.0  # Usable vertical band of the Earth tile pyramid
LNG_MIN, LNG_MAX = -180.0, 180.0

# Optional sign, digits with a dot as decimal separator. No exponents, no commas.
_DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def _parse(text: str | float) -> float | None:
    if isinstance(text, str):
        text = text.strip()
        if not _DECIMAL.fullmatch(text):
            return None
    elif isinstance(text, bool) or not isinstance(text, (int, float)):
        return None
    try:
        value = float(text)
    except OverflowError:  # int too large for a float
        return None
    # Overlong digit strings round to inf
    return value if math.isfinite(value) else None


def validate(lat_text: str | float, lng_text: str | float) -> LatLng:
    """Parse and range-check user-entered coordinates.

    Both values must parse before any range check runs. When both are out
    of range, latitude is reported first.

    Args:
        lat_text: Latitude as typed ("41.15").
        lng_text: Longitude as typed ("-20.16").

    Returns:
        The parsed LatLng.

    Raises:
        InvalidCoordinateInput: kind is NOT_A_NUMBER, LATITUDE_OUT_OF_RANGE
            or LONGITUDE_OUT_OF_RANGE.
    """
    lat = _parse(lat_text)
    lng = _parse(lng_text)
    if lat is None or lng is None:
        raise InvalidCoordinateInput(
            CoordinateErrorKind.NOT_A_NUMBER,
            f"Coordinates must be numbers: lat={lat_text!r}, lng={lng_text!r}",
        )
    if not LAT_MIN <= lat <= LAT_MAX:
        raise InvalidCoordinateInput(
            CoordinateErrorKind.LATITUDE_OUT_OF_RANGE,
            f"Latitude {lat} outside [{LAT_MIN:g}, {LAT_MAX:g}]",
        )
    if not LNG_MIN <= lng <= LNG_MAX:
        raise InvalidCoordinateInput(
            CoordinateErrorKind.LONGITUDE_OUT_OF_RANGE,
            f"Longitude {lng} outside [{LNG_MIN:g}, {LNG_MAX:g}]",
        )
    return LatLng(lat=lat, lng=lng)
