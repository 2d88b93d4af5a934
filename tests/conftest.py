"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src is on the path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from shapemask.data.rings import RingStoreBuilder  # noqa: E402

SQUARE = [(0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
INNER_SQUARE = [(3.0, 3.0), (7.0, 3.0), (7.0, 7.0), (3.0, 7.0)]


def make_store(*rings):
    builder = RingStoreBuilder()
    for ring in rings:
        builder.add_ring(ring)
    return builder.build()


@pytest.fixture
def square_store():
    """Single 10x10 degree square ring with its SW corner at the origin."""
    return make_store(SQUARE)


@pytest.fixture
def nested_store():
    """10x10 square containing a 4x4 square."""
    return make_store(SQUARE, INNER_SQUARE)


@pytest.fixture
def write_shapefile(tmp_path):
    """Factory writing polygon features (lists of rings) to a shapefile."""
    import fiona

    def _write(polygons, name="coast.shp"):
        path = tmp_path / name
        schema = {"geometry": "Polygon", "properties": {"id": "int"}}
        with fiona.open(str(path), "w", driver="ESRI Shapefile",
                        crs="EPSG:4326", schema=schema) as dst:
            for i, rings in enumerate(polygons):
                closed = [list(r) + [r[0]] for r in rings]
                dst.write({
                    "geometry": {"type": "Polygon", "coordinates": closed},
                    "properties": {"id": i},
                })
        return path

    return _write


@pytest.fixture
def write_area(tmp_path):
    """Factory writing a rectangular .are file (lat, lon per line)."""
    def _write(min_lon, min_lat, max_lon, max_lat, name="coast.are"):
        path = tmp_path / name
        path.write_text(
            f"{min_lat}, {min_lon}\n"
            f"{max_lat}, {min_lon}\n"
            f"{max_lat}, {max_lon}\n"
            f"{min_lat}, {max_lon}\n"
        )
        return path

    return _write
