"""Tests for area file parsing and geodesic conversions."""

import pytest

from shapemask.data.area import AreaFileError, parse_position, read_area_file
from shapemask.data.geodesy import angular_resolution, lon_bin_size_difference
from shapemask.raster.grid import compute_grid_geometry
from shapemask.types import BoundingBox


class TestParsePosition:
    @pytest.mark.parametrize("text,axis,expected", [
        ("30.5", "lat", 30.5),
        ("-88.25", "lon", -88.25),
        ("30N", "lat", 30.0),
        ("30-30S", "lat", -30.5),
        ("088-30-36.0W", "lon", -88.51),
        ("12-00-00.0e", "lon", 12.0),
    ])
    def test_formats(self, text, axis, expected):
        assert parse_position(text, axis) == pytest.approx(expected)

    @pytest.mark.parametrize("text,axis", [
        ("30E", "lat"), ("88N", "lon"), ("91.0", "lat"), ("abc", "lon"), ("1-2-3-4N", "lat"),
    ])
    def test_invalid(self, text, axis):
        with pytest.raises(ValueError):
            parse_position(text, axis)


class TestReadAreaFile:
    def test_bounds(self, tmp_path):
        path = tmp_path / "area.are"
        path.write_text(
            "# test area\n"
            "30-00-00.0N, 088-30-00.0W\n"
            "\n"
            "30.5 -88.5\n"
            "30.5, -88.0\n"
            "30-00N, 088-00W\n"
        )
        area = read_area_file(path)
        assert len(area.vertices) == 4
        assert area.vertices[0] == pytest.approx((-88.5, 30.0))
        assert area.bounds == pytest.approx((-88.5, 30.0, -88.0, 30.5))

    def test_missing(self, tmp_path):
        with pytest.raises(AreaFileError, match="not found"):
            read_area_file(tmp_path / "missing.are")

    def test_malformed_line(self, tmp_path):
        path = tmp_path / "bad.are"
        path.write_text("30.0, -88.0\n30.5\n")
        with pytest.raises(AreaFileError, match=":2:"):
            read_area_file(path)

    def test_too_few_vertices(self, tmp_path):
        path = tmp_path / "one.are"
        path.write_text("30.0, -88.0\n")
        with pytest.raises(AreaFileError, match="at least 2"):
            read_area_file(path)

    def test_degenerate_area(self, tmp_path):
        path = tmp_path / "line.are"
        path.write_text("30.0, -88.0\n31.0, -88.0\n")
        with pytest.raises(AreaFileError, match="zero width"):
            read_area_file(path)

    def test_is_value_error(self):
        assert issubclass(AreaFileError, ValueError)


class TestGeodesy:
    def test_equator_steps(self):
        lon_res, lat_res = angular_resolution(0.0, 0.0, 1000)
        # 1 km is ~1/111.32 deg of longitude and ~1/110.57 deg of latitude at the equator
        assert lon_res == pytest.approx(1000 / 111_319.49, rel=1e-4)
        assert lat_res == pytest.approx(1000 / 110_574.3, rel=1e-3)

    def test_longitude_step_grows_with_latitude(self):
        lon_eq, _ = angular_resolution(10.0, 0.0, 10)
        lon_60, _ = angular_resolution(10.0, 60.0, 10)
        assert lon_60 == pytest.approx(2 * lon_eq, rel=1e-2)

    @pytest.mark.parametrize("resolution", [0, -5])
    def test_non_positive_resolution(self, resolution):
        with pytest.raises(ValueError, match="positive"):
            angular_resolution(0.0, 0.0, resolution)

    def test_ns_difference_sign(self):
        """Longitude bins narrow toward the pole."""
        grid = compute_grid_geometry(BoundingBox(0.0, 40.0, 1.0, 41.0), 0.01, 0.01)
        assert lon_bin_size_difference(grid) < 0
        south = compute_grid_geometry(BoundingBox(0.0, -41.0, 1.0, -40.0), 0.01, 0.01)
        assert lon_bin_size_difference(south) > 0

    @pytest.mark.parametrize("center_lon,equivalent", [
        (179.9999, 179.9999),
        (200.0, -160.0),
        (359.5, -0.5),
    ])
    def test_step_wraps_across_antimeridian(self, center_lon, equivalent):
        lon_res, lat_res = angular_resolution(center_lon, 10.0, 100)
        ref_lon, ref_lat = angular_resolution(equivalent, 10.0, 100)
        assert 0 < lon_res < 0.01
        assert lon_res == pytest.approx(ref_lon, rel=1e-9)
        assert lat_res == pytest.approx(ref_lat, rel=1e-9)

    def test_grid_beyond_180(self):
        bounds = BoundingBox(199.9, 9.9, 200.1, 10.1)
        lon_res, lat_res = angular_resolution(*bounds.center, 1000)
        grid = compute_grid_geometry(bounds, lon_res, lat_res)
        assert grid.width > 0
        assert grid.origin_lon == pytest.approx(200.0 - grid.half_range_x * lon_res)
        assert lon_bin_size_difference(grid) < 0
