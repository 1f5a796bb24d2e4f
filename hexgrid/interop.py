"""
Geo Interop
===========

Bridges between grid cells and the shapely / geopandas / pandas stack.

Geometries are in (lng, lat) order, EPSG:4326, with hex string cell ids as
`region_id`.
"""

import logging
from typing import Iterable, Union

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.geometry import Polygon

from .codec import encode
from .coordinates import GeoCoordinate
from .index import from_string, get_resolution, require_valid_cell, to_string
from .metrics import boundary

logger = logging.getLogger(__name__)

CellLike = Union[int, str]


def _as_cell(cell: CellLike) -> int:
    if isinstance(cell, str):
        cell = from_string(cell)
    return require_valid_cell(cell)


def cell_to_polygon(cell: CellLike) -> Polygon:
    """Cell boundary as a shapely polygon in (lng, lat) order."""
    verts = boundary(_as_cell(cell))
    return Polygon([(v.lng, v.lat) for v in verts])


def cells_to_geodataframe(cells: Iterable[CellLike]) -> gpd.GeoDataFrame:
    """
    GeoDataFrame of cell polygons.

    Args:
        cells: Cell indexes as ints or hex strings

    Returns:
        GeoDataFrame indexed by hex `region_id` with a `resolution` column
    """
    records = []
    for cell in cells:
        h = _as_cell(cell)
        records.append({
            'region_id': to_string(h),
            'resolution': get_resolution(h),
            'geometry': cell_to_polygon(h),
        })

    gdf = gpd.GeoDataFrame(
        records, columns=['region_id', 'resolution', 'geometry'], geometry='geometry', crs="EPSG:4326"
    )
    gdf = gdf.set_index('region_id')
    logger.debug(f"Built GeoDataFrame with {len(gdf)} cells")
    return gdf


def encode_points(lats, lngs, res: int) -> pd.Series:
    """
    Index many points at one resolution.

    Args:
        lats: Latitudes in degrees (sequence or numpy array)
        lngs: Longitudes in degrees, same length as lats
        res: Resolution in [0, 15]

    Returns:
        Series of hex cell ids aligned with the input order
    """
    lats = np.asarray(lats, dtype=float)
    lngs = np.asarray(lngs, dtype=float)
    if lats.shape != lngs.shape:
        raise ValueError(f"Latitude and longitude shapes differ: {lats.shape} vs {lngs.shape}")

    cells = [
        to_string(encode(GeoCoordinate(float(lat), float(lng)), res))
        for lat, lng in zip(lats.ravel(), lngs.ravel())
    ]
    return pd.Series(cells, name='region_id', dtype=object)
