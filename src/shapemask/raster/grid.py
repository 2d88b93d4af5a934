"""Output grid geometry.

The area envelope is snapped to a whole number of cells and recentred on
its original midpoint. The integer arithmetic below (truncation, floor
division, round half away from zero) defines the grid exactly and must
not be replaced by float equivalents.
"""

import logging
import math

from shapemask.types import BoundingBox, GridGeometry

log = logging.getLogger(__name__)


def _nint(value: float) -> int:
    """Round half away from zero."""
    if value < 0.0:
        return int(value - 0.5)
    return int(value + 0.5)


def compute_grid_geometry(
    bounds: BoundingBox,
    lon_resolution: float,
    lat_resolution: float,
) -> GridGeometry:
    """Derive the raster origin and dimensions for an envelope.

    Args:
        bounds: Area envelope in decimal degrees.
        lon_resolution: Cell width in degrees (> 0).
        lat_resolution: Cell height in degrees (> 0).

    Returns:
        GridGeometry whose envelope is centered on ``bounds``.

    Raises:
        ValueError: Non-positive or non-finite resolution, or an inverted
            envelope.
    """
    for name, res in (("lon", lon_resolution), ("lat", lat_resolution)):
        if not math.isfinite(res) or res <= 0.0:
            raise ValueError(f"{name} resolution must be positive, got {res}")
    if bounds.max_lon < bounds.min_lon or bounds.max_lat < bounds.min_lat:
        raise ValueError(f"Inverted bounding box: {bounds}")

    center_lon, center_lat = bounds.center

    range_x = int((bounds.max_lon - bounds.min_lon) / lon_resolution) + 1
    range_y = int((bounds.max_lat - bounds.min_lat) / lat_resolution) + 1

    half_range_x = range_x // 2
    half_range_y = range_y // 2

    min_lon = center_lon - half_range_x * lon_resolution
    max_lon = center_lon + half_range_x * lon_resolution
    min_lat = center_lat - half_range_y * lat_resolution
    max_lat = center_lat + half_range_y * lat_resolution

    width = _nint((max_lon - min_lon) / lon_resolution)
    height = _nint((max_lat - min_lat) / lat_resolution)

    grid = GridGeometry(
        origin_lat=min_lat,
        origin_lon=min_lon,
        lat_resolution=lat_resolution,
        lon_resolution=lon_resolution,
        width=width,
        height=height,
        half_range_x=half_range_x,
        half_range_y=half_range_y,
    )
    log.info(
        f"Grid: {width}x{height} cells, origin ({min_lon:.11f}, {min_lat:.11f})"
    )
    return grid
