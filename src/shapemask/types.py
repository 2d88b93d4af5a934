"""Named tuples shared across shapemask."""

import math
from typing import NamedTuple

import numpy as np


class BoundingBox(NamedTuple):
    """Geographic envelope in decimal degrees."""
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @property
    def center(self) -> tuple[float, float]:
        """(lon, lat) midpoint of the envelope."""
        return (
            self.min_lon + (self.max_lon - self.min_lon) / 2.0,
            self.min_lat + (self.max_lat - self.min_lat) / 2.0,
        )

    def intersects(self, other: "BoundingBox") -> bool:
        return (
            self.min_lon <= other.max_lon and other.min_lon <= self.max_lon
            and self.min_lat <= other.max_lat and other.min_lat <= self.max_lat
        )


class Ring(NamedTuple):
    """One implicitly closed contour.

    lon: (n,) float64 vertex longitudes, read-only
    lat: (n,) float64 vertex latitudes, read-only
    """
    lon: np.ndarray
    lat: np.ndarray

    @property
    def n_vertices(self) -> int:
        return self.lon.shape[0]


class RingEdges(NamedTuple):
    """Edge endpoint arrays of a ring, edge i runs from vertex i-1 to vertex i.

    Vertex -1 is the last vertex, which closes the ring.
    """
    x0: np.ndarray
    y0: np.ndarray
    x1: np.ndarray
    y1: np.ndarray


class GridGeometry(NamedTuple):
    """Output raster geometry.

    origin_lat/origin_lon: south-west corner of cell (0, 0)
    lat_resolution/lon_resolution: angular size of one cell
    width/height: number of columns (lon) and rows (lat)
    half_range_x/half_range_y: column/row split used for the quadrants
    """
    origin_lat: float
    origin_lon: float
    lat_resolution: float
    lon_resolution: float
    width: int
    height: int
    half_range_x: int
    half_range_y: int

    @property
    def max_lon(self) -> float:
        return self.origin_lon + self.width * self.lon_resolution

    @property
    def max_lat(self) -> float:
        return self.origin_lat + self.height * self.lat_resolution

    @property
    def n_cells(self) -> int:
        return self.width * self.height

    def row_latitude(self, row: int) -> float:
        """Latitude of the center of every cell in ``row``."""
        return self.origin_lat + (row + 0.5) * self.lat_resolution

    def column_longitudes(self, start: int, stop: int) -> np.ndarray:
        """Cell-center longitudes of columns ``start`` to ``stop - 1``."""
        cols = np.arange(start, stop, dtype=np.float64)
        return self.origin_lon + (cols + 0.5) * self.lon_resolution

    def cell_index(self, lon: float, lat: float) -> tuple[int, int] | None:
        """(row, col) of the cell containing a point, or None outside the grid."""
        col = math.floor((lon - self.origin_lon) / self.lon_resolution)
        row = math.floor((lat - self.origin_lat) / self.lat_resolution)
        if 0 <= row < self.height and 0 <= col < self.width:
            return row, col
        return None


class RasterResult(NamedTuple):
    """Output of the rasterization engine.

    block: (height * width,) uint8 flat row-major mask, 1 = land
    completed: (n_quadrants,) bool per-worker completion flags
    """
    block: np.ndarray
    completed: np.ndarray
