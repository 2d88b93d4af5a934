"""Even-odd land/water classification against a ring store.

A point is inside a ring when a ray cast from it toward +lon crosses the
ring an odd number of times. Rings are layered by parity: the point is
land when it lies inside an odd number of rings (each nesting level, such
as an island in a lake on a continent, flips the result). With ``water``
set the rings are taken to enclose water and the result is inverted, so
the output is always a land mask.

Points exactly on an edge or vertex classify according to the half-open
crossing test below; their result is implementation-defined.

Two evaluation paths share the same crossing expression:
- ``point_in_ring`` / ``classify_point``: one point at a time.
- ``classify_row``: every cell center of a raster row at once. For a fixed
  latitude the crossing edges of a ring and their x-intercepts do not
  depend on longitude, so each column's crossing count is a binary search
  into the sorted intercepts.
"""

import numpy as np

from shapemask.data.rings import RingStore
from shapemask.types import Ring, RingEdges


def point_in_ring(lon: float, lat: float, ring: Ring) -> bool:
    """Crossing-number test for a single implicitly closed ring."""
    xs, ys = ring.lon, ring.lat
    n = xs.shape[0]
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = xs[i], ys[i]
        xj, yj = xs[j], ys[j]
        if (yi > lat) != (yj > lat) and lon < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def count_containing_rings(lon: float, lat: float, store: RingStore) -> int:
    """Number of rings that contain the point."""
    return sum(1 for ring in store if point_in_ring(lon, lat, ring))


def classify_point(lon: float, lat: float, store: RingStore, water: bool = False) -> bool:
    """True if the point is land."""
    odd = count_containing_rings(lon, lat, store) % 2 == 1
    return odd != water


def ring_intercepts(edges: RingEdges, lat: float) -> np.ndarray:
    """Sorted longitudes where the edges of one ring cross a latitude."""
    crosses = (edges.y1 > lat) != (edges.y0 > lat)
    if not crosses.any():
        return np.empty(0, dtype=np.float64)
    xi = edges.x1[crosses]
    yi = edges.y1[crosses]
    xj = edges.x0[crosses]
    yj = edges.y0[crosses]
    intercepts = (xj - xi) * (lat - yi) / (yj - yi) + xi
    intercepts.sort()
    return intercepts


def count_containing_rings_row(
    lons: np.ndarray,
    lat: float,
    store: RingStore,
) -> np.ndarray:
    """Per-point containing-ring counts for points sharing one latitude.

    Args:
        lons: (W,) float64 point longitudes.
        lat: Common latitude.
        store: Rings to test against.

    Returns:
        (W,) int32 number of rings containing each point.
    """
    counts = np.zeros(lons.shape[0], dtype=np.int32)
    for edges in store.edges:
        intercepts = ring_intercepts(edges, lat)
        if intercepts.size == 0:
            continue
        # Crossings east of each point: intercepts strictly greater than lon
        crossings = intercepts.size - np.searchsorted(intercepts, lons, side="right")
        counts += (crossings & 1).astype(np.int32)
    return counts


def classify_row(
    lons: np.ndarray,
    lat: float,
    store: RingStore,
    water: bool = False,
) -> np.ndarray:
    """Land (1) / water (0) flags for points sharing one latitude.

    Returns:
        (W,) uint8 mask values.
    """
    odd = (count_containing_rings_row(lons, lat, store) & 1).astype(bool)
    if water:
        odd = ~odd
    return odd.astype(np.uint8)
