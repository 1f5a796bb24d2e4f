# Hierarchical hexagonal discrete global grid (H3-compatible indexes)

from .coordinates import AngleUnit, GeoCoordinate, degs_to_rads, rads_to_degs
from .errors import (
    ErrorCode,
    HexGridError,
    InvalidResolutionError,
    InvalidIndexError,
    MalformedStringError,
    IncompatibleResolutionError,
    NotComparableError,
    DomainError,
    describe_error,
)
from .index import NULL_INDEX, to_string, from_string, is_valid_cell, is_valid_index
from .codec import encode, decode, resolution_of, base_cell_of, is_pentagon_cell as is_pentagon, res0_cells, pentagons
from .hierarchy import parent, children, child_count, center_child
from .traversal import GridDiskEntry, grid_disk, grid_disk_distances, grid_distance, max_grid_disk_size
from .metrics import (
    boundary,
    area_rads2,
    area_km2,
    area_m2,
    great_circle_distance_rads,
    great_circle_distance_km,
    great_circle_distance_m,
)
from .config import GridConfig, load_config, get_config, set_config

# Geo stack interop
from .interop import cell_to_polygon, cells_to_geodataframe, encode_points

__version__ = "0.1.0"

__all__ = [
    'AngleUnit',
    'GeoCoordinate',
    'degs_to_rads',
    'rads_to_degs',
    'ErrorCode',
    'HexGridError',
    'InvalidResolutionError',
    'InvalidIndexError',
    'MalformedStringError',
    'IncompatibleResolutionError',
    'NotComparableError',
    'DomainError',
    'describe_error',
    'NULL_INDEX',
    'to_string',
    'from_string',
    'is_valid_cell',
    'is_valid_index',
    'encode',
    'decode',
    'resolution_of',
    'base_cell_of',
    'is_pentagon',
    'res0_cells',
    'pentagons',
    'parent',
    'children',
    'child_count',
    'center_child',
    'GridDiskEntry',
    'grid_disk',
    'grid_disk_distances',
    'grid_distance',
    'max_grid_disk_size',
    'boundary',
    'area_rads2',
    'area_km2',
    'area_m2',
    'great_circle_distance_rads',
    'great_circle_distance_km',
    'great_circle_distance_m',
    'GridConfig',
    'load_config',
    'get_config',
    'set_config',
    'cell_to_polygon',
    'cells_to_geodataframe',
    'encode_points',
]
