"""Top-level mask generation.

  1. Area envelope from the .are file
  2. Metric resolution -> angular cell size at the envelope center
  3. Grid geometry (recentred, whole number of cells)
  4. Rings from the shapefile
  5. Four-thread rasterization
  6. Mask file (+ optional GeoTIFF)
"""

import logging
import time
from pathlib import Path

from shapemask.config import MaskConfig, VERSION
from shapemask.data.area import read_area_file
from shapemask.data.geodesy import angular_resolution, lon_bin_size_difference
from shapemask.data.rings import read_shapefile_rings
from shapemask.distributed.orchestrator import rasterize_mask
from shapemask.io.summary import compute_mask_statistics
from shapemask.io.writer import write_mask_file, write_mask_geotiff
from shapemask.raster.grid import compute_grid_geometry

log = logging.getLogger(__name__)


def validate_inputs(config: MaskConfig) -> None:
    """Validate that the configuration is usable before any work starts."""
    if config.resolution < 1:
        raise ValueError(f"Resolution must be a positive integer, got {config.resolution}")
    if not config.shapefile_path.exists():
        raise FileNotFoundError(f"Shapefile not found: {config.shapefile_path}")
    if config.shapefile_path.suffix.lower() != ".shp":
        raise ValueError(f"Not a shapefile (.shp): {config.shapefile_path}")


def run_pipeline(config: MaskConfig) -> dict:
    """Build a land mask from a shapefile and its area file.

    Args:
        config: Mask configuration.

    Returns:
        Dict with the grid geometry, output paths and cell statistics.

    Raises:
        AreaFileError: Area file missing or malformed.
        FileNotFoundError, ValueError, OSError: Unreadable vector input,
            degenerate grid, or unwritable output.
        MemoryError: Raster buffer could not be allocated.
    """
    log.info(VERSION)
    t_start = time.time()

    # Step 1: Validate
    validate_inputs(config)

    # Step 2: Area envelope
    area = read_area_file(config.area_path)

    # Step 3: Grid geometry
    center_lon, center_lat = area.bounds.center
    lon_res, lat_res = angular_resolution(center_lon, center_lat, config.resolution)
    grid = compute_grid_geometry(area.bounds, lon_res, lat_res)
    if grid.width < 1 or grid.height < 1:
        raise ValueError(
            f"Area is smaller than one {config.resolution} m cell "
            f"({grid.width}x{grid.height} grid)"
        )

    # Step 4: Rings
    store = read_shapefile_rings(config.shapefile_path)
    if len(store) == 0:
        log.warning(f"No rings in {config.shapefile_path}; mask will be uniform")
    elif not store.bounds.intersects(area.bounds):
        # Usually a longitude convention mismatch (0-360 vs -180..180)
        log.warning(
            f"Ring extent {tuple(store.bounds)} does not overlap the {len(area.vertices)}-vertex "
            f"area envelope {tuple(area.bounds)}; mask will be uniform"
        )

    # Step 5: Rasterize
    polarity = "water" if config.water else "land"
    log.info(f"Rings represent {polarity}")
    result = rasterize_mask(grid, store, water=config.water)

    # Step 6: Write
    ns_difference = lon_bin_size_difference(grid)
    write_mask_file(
        config.mask_path, grid, result.block, config.resolution, ns_difference,
        header_size=config.io.header_size,
    )
    geotiff_path = None
    if config.geotiff:
        geotiff_path = write_mask_geotiff(
            config.geotiff_path, grid, result.block,
            compression=config.io.compression, tile_size=config.io.tile_size,
        )

    stats = compute_mask_statistics(result.block)
    log.info(
        f"Land cells: {stats['n_land']:,}/{stats['n_cells']:,} "
        f"({stats['land_fraction']:.2%})"
    )
    log.info(f"Pipeline complete in {time.time() - t_start:.1f}s")

    return {
        "grid": grid,
        "mask_path": Path(config.mask_path),
        "geotiff_path": geotiff_path,
        "n_rings": len(store),
        "stats": stats,
    }
