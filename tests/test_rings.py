"""Tests for ring store construction and shapefile ingestion."""

import numpy as np
import pytest

from shapemask.data.rings import RingStoreBuilder, _geometry_parts, read_shapefile_rings

from conftest import INNER_SQUARE, SQUARE


class TestRingStoreBuilder:
    def test_vertex_by_vertex(self):
        builder = RingStoreBuilder()
        builder.start_ring()
        for lon, lat in SQUARE:
            builder.append_vertex(lon, lat)
        builder.start_ring()
        for lon, lat in INNER_SQUARE:
            builder.append_vertex(lon, lat)
        store = builder.build()

        assert len(store) == 2
        assert store.n_vertices == 8
        np.testing.assert_array_equal(store[0].lon, [0.0, 10.0, 10.0, 0.0])
        np.testing.assert_array_equal(store[1].lat, [3.0, 3.0, 7.0, 7.0])

    def test_short_rings_dropped(self):
        builder = RingStoreBuilder()
        builder.add_ring([(1.0, 1.0)])
        builder.add_ring(SQUARE)
        builder.start_ring()
        store = builder.build()
        assert len(store) == 1
        assert builder.n_dropped == 2

    def test_z_values_ignored(self):
        builder = RingStoreBuilder()
        builder.add_ring([(0.0, 0.0, 5.0), (1.0, 0.0, 5.0), (1.0, 1.0, 5.0)])
        store = builder.build()
        np.testing.assert_array_equal(store[0].lat, [0.0, 0.0, 1.0])

    def test_frozen_after_build(self):
        builder = RingStoreBuilder()
        builder.add_ring(SQUARE)
        store = builder.build()
        with pytest.raises(RuntimeError, match="already built"):
            builder.add_ring(INNER_SQUARE)
        with pytest.raises(ValueError):
            store[0].lon[0] = 99.0
        with pytest.raises(ValueError):
            store.edges[0].x0[0] = 99.0

    def test_append_before_start_raises(self):
        with pytest.raises(RuntimeError, match="before start_ring"):
            RingStoreBuilder().append_vertex(0.0, 0.0)

    def test_edges_close_ring(self, square_store):
        """Edge 0 runs from the last vertex back to the first."""
        edges = square_store.edges[0]
        assert (edges.x0[0], edges.y0[0]) == (0.0, 10.0)
        assert (edges.x1[0], edges.y1[0]) == (0.0, 0.0)
        np.testing.assert_array_equal(edges.x0[1:], square_store[0].lon[:-1])

    def test_bounds(self, nested_store):
        assert tuple(nested_store.bounds) == (0.0, 0.0, 10.0, 10.0)
        assert RingStoreBuilder().build().bounds is None


class TestGeometryParts:
    def test_polygon_with_hole(self):
        geom = {"type": "Polygon", "coordinates": [SQUARE, INNER_SQUARE]}
        assert len(_geometry_parts(geom)) == 2

    def test_multipolygon_flattened(self):
        geom = {"type": "MultiPolygon", "coordinates": [[SQUARE, INNER_SQUARE], [SQUARE]]}
        assert len(_geometry_parts(geom)) == 3

    def test_lines(self):
        assert len(_geometry_parts({"type": "LineString", "coordinates": SQUARE})) == 1
        assert len(_geometry_parts({"type": "MultiLineString", "coordinates": [SQUARE, SQUARE]})) == 2

    def test_points_unsupported(self):
        assert _geometry_parts({"type": "Point", "coordinates": (0.0, 0.0)}) == []


class TestReadShapefile:
    def test_reads_all_rings_in_order(self, write_shapefile):
        path = write_shapefile([
            [SQUARE, INNER_SQUARE],
            [[(20.0, 20.0), (22.0, 20.0), (22.0, 22.0), (20.0, 22.0)]],
        ])
        store = read_shapefile_rings(path)

        assert len(store) == 3
        assert tuple(store.bounds) == (0.0, 0.0, 22.0, 22.0)
        # Shapefile rings come back explicitly closed
        for ring in store:
            assert ring.n_vertices == 5
            assert ring.lon[0] == ring.lon[-1]
        assert store[2].lon.min() == 20.0

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises((ValueError, OSError)):
            read_shapefile_rings(tmp_path / "nope.shp")
