"""Ring store: the polygon contours a mask is classified against.

Rings are gathered through an append-only builder while the vector file
is scanned, then frozen into a read-only ``RingStore`` that every
rasterization worker shares without locking.
"""

import logging
from pathlib import Path

import fiona
import numpy as np

from shapemask.types import BoundingBox, Ring, RingEdges

log = logging.getLogger(__name__)

MIN_RING_VERTICES = 2


def _frozen(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    arr.flags.writeable = False
    return arr


class RingStore:
    """Immutable ordered collection of rings."""

    def __init__(self, rings: list[Ring]):
        self._rings = tuple(rings)
        self._edges = tuple(self._ring_edges(r) for r in self._rings)

    @staticmethod
    def _ring_edges(ring: Ring) -> RingEdges:
        # Edge i joins vertex i-1 to vertex i; edge 0 closes the ring.
        return RingEdges(
            x0=_frozen(np.roll(ring.lon, 1)),
            y0=_frozen(np.roll(ring.lat, 1)),
            x1=ring.lon,
            y1=ring.lat,
        )

    def __len__(self) -> int:
        return len(self._rings)

    def __getitem__(self, index: int) -> Ring:
        return self._rings[index]

    def __iter__(self):
        return iter(self._rings)

    @property
    def edges(self) -> tuple[RingEdges, ...]:
        """Per-ring edge arrays, in ring order."""
        return self._edges

    @property
    def n_vertices(self) -> int:
        return sum(r.n_vertices for r in self._rings)

    @property
    def bounds(self) -> BoundingBox | None:
        """Envelope of all vertices, or None for an empty store."""
        if not self._rings:
            return None
        lons = np.concatenate([r.lon for r in self._rings])
        lats = np.concatenate([r.lat for r in self._rings])
        return BoundingBox(
            float(lons.min()), float(lats.min()),
            float(lons.max()), float(lats.max()),
        )


class RingStoreBuilder:
    """Append-only ring accumulator, owned by the ingestion step.

    Usage::

        builder = RingStoreBuilder()
        builder.start_ring()
        builder.append_vertex(0.0, 0.0)
        ...
        store = builder.build()
    """

    def __init__(self):
        self._rings: list[Ring] = []
        self._lon: list[float] | None = None
        self._lat: list[float] | None = None
        self._built = False
        self.n_dropped = 0

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError("RingStoreBuilder already built; rings are frozen")

    def _finish_ring(self) -> None:
        if self._lon is None:
            return
        if len(self._lon) >= MIN_RING_VERTICES:
            self._rings.append(Ring(lon=_frozen(self._lon), lat=_frozen(self._lat)))
        else:
            self.n_dropped += 1
            log.warning(
                f"Dropping ring with {len(self._lon)} vertex(es) "
                f"(minimum {MIN_RING_VERTICES})"
            )
        self._lon = None
        self._lat = None

    def start_ring(self) -> None:
        """Close the current ring (if any) and begin a new one."""
        self._check_open()
        self._finish_ring()
        self._lon = []
        self._lat = []

    def append_vertex(self, lon: float, lat: float) -> None:
        """Append a vertex to the current ring."""
        self._check_open()
        if self._lon is None:
            raise RuntimeError("append_vertex() called before start_ring()")
        self._lon.append(float(lon))
        self._lat.append(float(lat))

    def add_ring(self, vertices) -> None:
        """Add a complete ring from an iterable of (lon, lat[, z]) positions."""
        self.start_ring()
        for position in vertices:
            self.append_vertex(position[0], position[1])
        self._finish_ring()

    def build(self) -> RingStore:
        """Freeze the accumulated rings into a RingStore."""
        self._check_open()
        self._finish_ring()
        self._built = True
        return RingStore(self._rings)


def _geometry_parts(geometry) -> list:
    """Return the vertex sequences of every part of a fiona geometry."""
    geom_type = geometry["type"]
    coords = geometry["coordinates"]
    if geom_type in ("Polygon", "MultiLineString"):
        return list(coords)
    if geom_type == "MultiPolygon":
        return [ring for polygon in coords for ring in polygon]
    if geom_type == "LineString":
        return [coords]
    return []


def read_shapefile_rings(shapefile_path: Path) -> RingStore:
    """Read every part of every feature of a shapefile as a ring.

    Args:
        shapefile_path: Path to the .shp file.

    Returns:
        Frozen RingStore, rings in file order.

    Raises:
        fiona.errors.DriverError: File missing or not a readable vector
            dataset (a ValueError subclass).
    """
    builder = RingStoreBuilder()
    n_features = 0
    n_skipped = 0

    with fiona.open(str(shapefile_path)) as src:
        log.info(f"Reading {Path(shapefile_path).name}: {len(src)} features")
        for feat in src:
            n_features += 1
            geometry = feat["geometry"]
            if geometry is None:
                n_skipped += 1
                continue
            parts = _geometry_parts(geometry)
            if not parts:
                log.warning(
                    f"Skipping feature {n_features - 1}: unsupported "
                    f"geometry type {geometry['type']}"
                )
                n_skipped += 1
                continue
            for part in parts:
                builder.add_ring(part)

    store = builder.build()
    log.info(
        f"Loaded {len(store)} rings ({store.n_vertices:,} vertices) from "
        f"{n_features} features, {n_skipped} features skipped, "
        f"{builder.n_dropped} rings dropped"
    )
    return store
