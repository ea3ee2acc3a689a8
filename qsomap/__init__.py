"""QSO Map - ADIF log parsing, aggregation and grid/great-circle geometry."""

from .geo_utils import (
    GeoPoint, grid_to_latlon, grid_bounds, normalize_grid,
    calc_bearing, calc_distance_km, bearing_to_direction,
)
from .adif import LogReadError, parse_adif, read_adif_file, load_adif_file
from .aggregate import QsoGroup, aggregate_qsos, filter_options, filter_qsos
from .position import ResolvedPosition, parse_coordinate, resolve_position
from .qso_map import (
    HomeLocation, MappedQso, QsoLog, QsoMap,
    set_home_location, load_log, load_log_file, build_map, build_log_map,
)
from .config import load_config, save_config
from .logging_config import setup_logging

__all__ = [
    # Geo utilities
    'GeoPoint',
    'grid_to_latlon',
    'grid_bounds',
    'normalize_grid',
    'calc_bearing',
    'calc_distance_km',
    'bearing_to_direction',
    # ADIF parsing
    'LogReadError',
    'parse_adif',
    'read_adif_file',
    'load_adif_file',
    # Aggregation
    'QsoGroup',
    'aggregate_qsos',
    'filter_options',
    'filter_qsos',
    # Positions
    'ResolvedPosition',
    'parse_coordinate',
    'resolve_position',
    # Map view
    'HomeLocation',
    'MappedQso',
    'QsoLog',
    'QsoMap',
    'set_home_location',
    'load_log',
    'load_log_file',
    'build_map',
    'build_log_map',
    # Config
    'load_config',
    'save_config',
    'setup_logging',
]
