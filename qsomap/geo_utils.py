"""Geographic utilities for Maidenhead grid squares and distance/bearing calculations."""

import math
import re
from typing import NamedTuple


# Field letters A-R, square digits, optional subsquare letters A-X
GRID_PATTERN = re.compile(r'^[A-R]{2}[0-9]{2}([A-X]{2})?')


class GeoPoint(NamedTuple):
    lat: float
    lon: float


def normalize_grid(grid: str | None) -> str:
    """Upper-case and strip a grid locator for display and comparison."""
    return (grid or "").upper().strip()


def grid_to_latlon(grid: str | None) -> GeoPoint | None:
    """Convert Maidenhead grid to lat/lon (center of grid).

    A 4-character locator lands on the center of its 2°x1° square, a
    6-character one on the center of its 5'x2.5' subsquare. A 5-character
    locator is malformed. Characters beyond the sixth are ignored.

    Args:
        grid: Maidenhead grid square (4 or 6 characters)

    Returns:
        GeoPoint (latitude, longitude) or None if invalid
    """
    grid = normalize_grid(grid)
    if len(grid) < 4 or len(grid) == 5:
        return None

    subsquare = len(grid) >= 6
    match = GRID_PATTERN.match(grid[:6] if subsquare else grid[:4])
    if not match or (subsquare and not match.group(1)):
        return None

    lon = (ord(grid[0]) - ord('A')) * 20 - 180.0
    lat = (ord(grid[1]) - ord('A')) * 10 - 90.0
    lon += int(grid[2]) * 2
    lat += int(grid[3]) * 1

    if subsquare:
        lon += (ord(grid[4]) - ord('A')) * 5 / 60
        lat += (ord(grid[5]) - ord('A')) * 2.5 / 60
        lon += 2.5 / 60  # center of 6-char subsquare
        lat += 1.25 / 60
    else:
        lon += 1  # center of 4-char square
        lat += 0.5

    return GeoPoint(lat, lon)


def grid_bounds(grid: str | None) -> list[tuple[float, float]] | None:
    """Bounding box of the 4-character square containing a grid.

    Args:
        grid: Maidenhead grid square (only the first 4 characters are used)

    Returns:
        Closed polygon of (lat, lon) points SW, NW, NE, SE, SW, or None
        if the grid cannot be decoded
    """
    center = grid_to_latlon(normalize_grid(grid)[:4])
    if center is None:
        return None

    sw_lat = center.lat - 0.5
    sw_lon = center.lon - 1
    ne_lat = sw_lat + 1
    ne_lon = sw_lon + 2
    return [
        (sw_lat, sw_lon),
        (ne_lat, sw_lon),
        (ne_lat, ne_lon),
        (sw_lat, ne_lon),
        (sw_lat, sw_lon),
    ]


def calc_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate bearing from point 1 to point 2 in degrees.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Bearing in degrees (0-360)
    """
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlon = lon2 - lon1
    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    bearing = math.atan2(x, y)
    return (math.degrees(bearing) + 360) % 360


def calc_distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate great-circle distance between two points in kilometers.

    Haversine on a sphere, no ellipsoid correction.

    Args:
        lat1, lon1: Starting point latitude and longitude
        lat2, lon2: Ending point latitude and longitude

    Returns:
        Distance in kilometers
    """
    R = 6371  # Earth's radius in km
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1-a))
    return R * c


def bearing_to_direction(bearing: float) -> str:
    """Convert bearing to compass direction.

    Args:
        bearing: Bearing in degrees (0-360)

    Returns:
        Compass direction (N, NNE, NE, etc.)
    """
    dirs = ["N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
            "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW"]
    idx = round(bearing / 22.5) % 16
    return dirs[idx]
