"""Pick a map position for a QSO group."""

import math
import re
from collections.abc import Mapping
from typing import NamedTuple

from .geo_utils import GeoPoint, grid_to_latlon, normalize_grid

# ADIF location format: XDDD MM.MMM (e.g. N040 30.000, W074 15.500)
ADIF_LOCATION = re.compile(r'^([NSEW])(\d{1,3})\s+(\d{1,2}(?:\.\d*)?)$')

SOURCE_LATLON = "LAT/LON"


class ResolvedPosition(NamedTuple):
    point: GeoPoint
    source: str


def parse_coordinate(value: str | None) -> float | None:
    """Parse a LAT or LON field.

    Accepts decimal degrees ("40.5", "-74.25") or the ADIF location form
    ("N040 30.000"); S and W are negative.

    Returns:
        Degrees as float, or None if unparseable
    """
    if not value:
        return None
    value = value.strip().upper()

    match = ADIF_LOCATION.match(value)
    if match:
        hemisphere, degrees, minutes = match.groups()
        result = int(degrees) + float(minutes) / 60
        return -result if hemisphere in "SW" else result

    try:
        result = float(value)
    except ValueError:
        return None
    return result if math.isfinite(result) else None


def resolve_position(qso: Mapping[str, str]) -> ResolvedPosition | None:
    """Resolve a position for a QSO (or QSO group).

    The grid square wins when it decodes; otherwise explicit LAT/LON are
    used. A coordinate of exactly 0 counts as missing, so a station on the
    equator or the prime meridian only maps via its grid. Coordinates outside
    [-90, 90] x [-180, 180] are rejected.

    Returns:
        ResolvedPosition, or None when neither source gives a position
    """
    grid = qso.get("GRIDSQUARE") or ""
    point = grid_to_latlon(grid)
    if point is not None:
        return ResolvedPosition(point, f"Grid Center ({normalize_grid(grid)})")

    lat = parse_coordinate(qso.get("LAT"))
    lon = parse_coordinate(qso.get("LON"))
    if lat and lon and -90 <= lat <= 90 and -180 <= lon <= 180:
        return ResolvedPosition(GeoPoint(lat, lon), SOURCE_LATLON)

    return None
