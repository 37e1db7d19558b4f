"""Slippy-map tile math.

Tiles follow the web-mercator scheme: ``x`` grows eastwards, ``y`` grows
southwards, and a zoom level ``z`` has ``2**z`` tiles along each axis.
"""

from __future__ import annotations

import math

from notequests.contracts.exceptions import TileRangeError
from notequests.contracts.geo import BoundingBox, TileRect

QUEST_TILE_ZOOM = 14
MAX_MERCATOR_LAT = 85.0511287798066


def _tile_count(zoom: int) -> int:
    if zoom < 0:
        raise TileRangeError(f"zoom must be non-negative, got {zoom}")
    return 1 << zoom


def tile_to_lon(x: int, zoom: int) -> float:
    return x / _tile_count(zoom) * 360.0 - 180.0


def tile_to_lat(y: int, zoom: int) -> float:
    n = math.pi * (1 - 2 * y / _tile_count(zoom))
    return math.degrees(math.atan(math.sinh(n)))


def lon_to_tile(lon: float, zoom: int) -> int:
    count = _tile_count(zoom)
    x = int(math.floor((lon + 180.0) / 360.0 * count))
    return min(max(x, 0), count - 1)


def lat_to_tile(lat: float, zoom: int) -> int:
    count = _tile_count(zoom)
    lat = min(max(lat, -MAX_MERCATOR_LAT), MAX_MERCATOR_LAT)
    rad = math.radians(lat)
    y = int(math.floor((1 - math.asinh(math.tan(rad)) / math.pi) / 2 * count))
    return min(max(y, 0), count - 1)


def tile_rect_to_bbox(tiles: TileRect, zoom: int = QUEST_TILE_ZOOM) -> BoundingBox:
    """Return the bounding box covering every tile in *tiles*."""
    count = _tile_count(zoom)
    if tiles.right >= count or tiles.bottom >= count:
        raise TileRangeError(f"tiles {tiles.key} out of range for zoom {zoom}")
    return BoundingBox(
        min_lat=tile_to_lat(tiles.bottom + 1, zoom),
        min_lon=tile_to_lon(tiles.left, zoom),
        max_lat=tile_to_lat(tiles.top, zoom),
        max_lon=tile_to_lon(tiles.right + 1, zoom),
    )


def bbox_to_tile_rect(bbox: BoundingBox, zoom: int = QUEST_TILE_ZOOM) -> TileRect:
    """Return the smallest tile rectangle enclosing *bbox*."""
    return TileRect(
        left=lon_to_tile(bbox.min_lon, zoom),
        top=lat_to_tile(bbox.max_lat, zoom),
        right=lon_to_tile(bbox.max_lon, zoom),
        bottom=lat_to_tile(bbox.min_lat, zoom),
    )
