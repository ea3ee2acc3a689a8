"""Turn an ADIF log into map-ready QSO groups.

load_log() does the parse + aggregate step once per file load. build_map()
filters the groups, resolves positions and, when a home location is given,
adds distance and bearing from home. The home location is passed in
explicitly; nothing here keeps state between calls.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .adif import RawRecord, parse_adif, read_adif_file
from .aggregate import ALL, QsoGroup, aggregate_qsos, filter_options, filter_qsos
from .geo_utils import GeoPoint, calc_bearing, calc_distance_km, grid_bounds, grid_to_latlon, normalize_grid
from .position import ResolvedPosition, resolve_position

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HomeLocation:
    point: GeoPoint
    grid: str


def set_home_location(grid: str | None) -> HomeLocation | None:
    """Build a home location from a grid locator.

    Returns:
        HomeLocation with the normalized grid, or None if the grid is invalid
    """
    point = grid_to_latlon(grid)
    if point is None:
        logger.info("Invalid home grid %r", grid)
        return None
    return HomeLocation(point=point, grid=normalize_grid(grid))


@dataclass(frozen=True)
class QsoLog:
    """One loaded log: the raw records and their aggregated groups."""
    records: list[RawRecord]
    groups: list[QsoGroup]

    @property
    def total_count(self) -> int:
        return len(self.records)

    def filter_options(self) -> tuple[list[str], list[str]]:
        return filter_options(self.groups)


def load_log(adif_text: str) -> QsoLog:
    """Parse and aggregate ADIF text. Reloading the same text gives equal groups."""
    records = parse_adif(adif_text)
    groups = aggregate_qsos(records)
    logger.info("Loaded %d QSOs (%d unique station/band/grid)", len(records), len(groups))
    return QsoLog(records=records, groups=groups)


def load_log_file(path: Path | str) -> QsoLog:
    """Read and load an ADIF file. Raises LogReadError if unreadable."""
    return load_log(read_adif_file(path))


@dataclass(frozen=True)
class MappedQso:
    group: QsoGroup
    position: ResolvedPosition
    distance_km: float | None = None
    bearing_deg: float | None = None

    @property
    def lat(self) -> float:
        return self.position.point.lat

    @property
    def lon(self) -> float:
        return self.position.point.lon


@dataclass
class QsoMap:
    """Everything the map view needs for one filter selection."""
    mapped: list[MappedQso] = field(default_factory=list)
    total_count: int | None = None
    overlays: dict[str, list[tuple[float, float]]] = field(default_factory=dict)
    home: HomeLocation | None = None

    @property
    def mapped_count(self) -> int:
        return len(self.mapped)

    @property
    def grids(self) -> list[str]:
        return list(self.overlays)


def map_qso(group: QsoGroup, home: HomeLocation | None = None) -> MappedQso | None:
    """Resolve one group's position and its path from home, if any."""
    position = resolve_position(group)
    if position is None:
        return None
    if home is None:
        return MappedQso(group, position)

    lat, lon = position.point
    return MappedQso(
        group,
        position,
        distance_km=calc_distance_km(home.point.lat, home.point.lon, lat, lon),
        bearing_deg=calc_bearing(home.point.lat, home.point.lon, lat, lon),
    )


def build_map(groups: Iterable[QsoGroup], home: HomeLocation | None = None,
              band: str = ALL, mode: str = ALL, total_count: int | None = None) -> QsoMap:
    """Resolve positions for the groups matching a band/mode selection.

    Groups without a usable position are left out, so mapped_count can be
    lower than the number of groups. Grid overlays cover the 4-character
    squares of mapped groups that have a grid square, in first-seen order.

    Args:
        groups: QSO groups from aggregate_qsos()
        home: Optional home location for distance/bearing
        band: Band filter ("ALL" for every band)
        mode: Mode filter ("ALL" for every mode)
        total_count: Raw QSO count to report (None when not known)

    Returns:
        QsoMap
    """
    groups = list(groups)
    result = QsoMap(total_count=total_count, home=home)

    for group in filter_qsos(groups, band=band, mode=mode):
        mapped = map_qso(group, home)
        if mapped is None:
            continue
        result.mapped.append(mapped)

        grid4 = (group.get("GRIDSQUARE") or "")[:4]
        if len(grid4) == 4 and grid4 not in result.overlays:
            bounds = grid_bounds(grid4)
            if bounds is not None:
                result.overlays[grid4] = bounds

    logger.debug("Mapped %d of %d groups (band=%s, mode=%s)",
                 result.mapped_count, len(groups), band, mode)
    return result


def build_log_map(log: QsoLog, home: HomeLocation | None = None,
                  band: str = ALL, mode: str = ALL) -> QsoMap:
    """build_map() for a loaded log, reporting its raw QSO count."""
    return build_map(log.groups, home=home, band=band, mode=mode, total_count=log.total_count)
