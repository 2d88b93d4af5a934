"""Metric to angular conversions on the WGS84 ellipsoid."""

import logging

from pyproj import Geod

from shapemask.config import WGS84_ELLIPSOID
from shapemask.types import GridGeometry

log = logging.getLogger(__name__)

_GEOD = Geod(ellps=WGS84_ELLIPSOID)


def angular_resolution(
    center_lon: float,
    center_lat: float,
    resolution: float,
) -> tuple[float, float]:
    """Convert a metric bin size to longitude/latitude steps at a point.

    Walks ``resolution`` metres due east and due north from the center
    along the geodesic and returns the coordinate deltas. The longitude
    delta is wrapped, so centers across the antimeridian or in the 0-360
    convention get the same step as their [-180, 180] equivalent.

    Args:
        center_lon: Longitude of the area center (degrees).
        center_lat: Latitude of the area center (degrees).
        resolution: Bin size in metres (> 0).

    Returns:
        (lon_resolution, lat_resolution) in decimal degrees.
    """
    if resolution <= 0:
        raise ValueError(f"Resolution must be positive, got {resolution}")

    east_lon, _, _ = _GEOD.fwd(center_lon, center_lat, 90.0, resolution)
    _, north_lat, _ = _GEOD.fwd(center_lon, center_lat, 0.0, resolution)

    # fwd returns longitudes in [-180, 180]
    lon_resolution = (east_lon - center_lon + 180.0) % 360.0 - 180.0
    lat_resolution = north_lat - center_lat
    log.info(
        f"{resolution} m at ({center_lon:.6f}, {center_lat:.6f}) = "
        f"{lon_resolution:.11f} deg lon x {lat_resolution:.11f} deg lat"
    )
    return lon_resolution, lat_resolution


def lon_bin_size_difference(grid: GridGeometry) -> float:
    """Metric width of one longitude bin at the north edge minus the south edge."""
    west = grid.origin_lon
    east = grid.origin_lon + grid.lon_resolution
    _, _, dist_n = _GEOD.inv(west, grid.max_lat, east, grid.max_lat)
    _, _, dist_s = _GEOD.inv(west, grid.origin_lat, east, grid.origin_lat)
    return dist_n - dist_s
