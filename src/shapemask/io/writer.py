"""Mask file encoding.

Mask file layout
----------------
  [HEADER SIZE] = 16384
  [VERSION] = ...
  [CREATION DATE] = Mon Oct 19 05:15:00 2026
  [START LAT] = ...            south-west corner, %.11f
  [START LON] = ...
  [LAT RESOLUTION] = ...       cell size in degrees, %.11f
  [LON RESOLUTION] = ...
  [HEIGHT] = ...
  [WIDTH] = ...
  [NOMINAL BIN SIZE IN METERS] = ...
  [NORTH SOUTH LON BIN SIZE DIFFERENCE IN METERS] = ...
  [END OF HEADER]
  <zero bytes up to HEADER SIZE>
  <HEIGHT * WIDTH bytes, 1 = land, 0 = water, row 0 = southern-most row>

The GeoTIFF export holds the same cells, north-up, in EPSG:4326.
"""
from __future__ import annotations

import logging
import time
from pathlib import Path

import numpy as np
import rasterio
from rasterio.transform import from_origin

from shapemask.config import VERSION
from shapemask.types import GridGeometry

log = logging.getLogger(__name__)

HEADER_SIZE = 16384
END_OF_HEADER = "[END OF HEADER]"


def format_header(
    grid: GridGeometry,
    resolution: int,
    ns_difference: float,
    header_size: int = HEADER_SIZE,
    version: str = VERSION,
    created: time.struct_time | None = None,
) -> str:
    """Build the ASCII mask header (without zero padding).

    Args:
        grid: Output grid geometry.
        resolution: Nominal bin size in metres.
        ns_difference: North minus south longitude bin width in metres.
        header_size: Value written to the [HEADER SIZE] field.
        version: Value written to the [VERSION] field.
        created: UTC creation time (default: now).
    """
    if created is None:
        created = time.gmtime()

    lines = [
        f"[HEADER SIZE] = {header_size}",
        f"[VERSION] = {version}",
        f"[CREATION DATE] = {time.asctime(created)}",
        f"[START LAT] = {grid.origin_lat:.11f}",
        f"[START LON] = {grid.origin_lon:.11f}",
        f"[LAT RESOLUTION] = {grid.lat_resolution:.11f}",
        f"[LON RESOLUTION] = {grid.lon_resolution:.11f}",
        f"[HEIGHT] = {grid.height}",
        f"[WIDTH] = {grid.width}",
        f"[NOMINAL BIN SIZE IN METERS] = {resolution}",
        f"[NORTH SOUTH LON BIN SIZE DIFFERENCE IN METERS] = {ns_difference:.08f}",
        END_OF_HEADER,
    ]
    return "\n".join(lines) + "\n"


def write_mask_file(
    path: Path,
    grid: GridGeometry,
    block: np.ndarray,
    resolution: int,
    ns_difference: float,
    header_size: int = HEADER_SIZE,
    version: str = VERSION,
) -> Path:
    """Write a mask file: padded ASCII header followed by the raw cells.

    Args:
        path: Output file path.
        grid: Output grid geometry.
        block: (height * width,) or (height, width) uint8 cells, row 0 south.
        resolution: Nominal bin size in metres.
        ns_difference: North/south longitude bin width difference (metres).
        header_size: Total header bytes including padding.
        version: Version string for the header.

    Returns:
        path for chaining.
    """
    if block.size != grid.n_cells:
        raise ValueError(
            f"Block has {block.size} cells, grid needs {grid.width}x{grid.height}"
        )

    header = format_header(
        grid, resolution, ns_difference, header_size=header_size, version=version,
    ).encode("ascii")
    if len(header) > header_size:
        raise ValueError(f"Header is {len(header)} bytes, exceeds {header_size}")

    with open(path, "wb") as f:
        f.write(header)
        f.write(b"\0" * (header_size - len(header)))
        f.write(np.ascontiguousarray(block, dtype=np.uint8).tobytes())

    log.info(f"Wrote {grid.width}x{grid.height} mask to {path}")
    return Path(path)


def write_mask_geotiff(
    path: Path,
    grid: GridGeometry,
    block: np.ndarray,
    compression: str = "deflate",
    tile_size: int = 256,
) -> Path:
    """Write the mask as a single-band uint8 GeoTIFF (north-up, EPSG:4326)."""
    cells = np.asarray(block, dtype=np.uint8).reshape(grid.height, grid.width)
    transform = from_origin(
        grid.origin_lon, grid.max_lat, grid.lon_resolution, grid.lat_resolution
    )

    profile = {
        "driver": "GTiff",
        "crs": "EPSG:4326",
        "transform": transform,
        "width": grid.width,
        "height": grid.height,
        "count": 1,
        "dtype": "uint8",
        "compress": compression,
    }
    # GTiff tiles must be multiples of 16 and fit inside the raster
    if grid.width >= tile_size and grid.height >= tile_size:
        profile.update(tiled=True, blockxsize=tile_size, blockysize=tile_size)

    with rasterio.open(path, "w", **profile) as dst:
        dst.write(cells[::-1, :], 1)

    log.info(f"Wrote GeoTIFF mask to {path}")
    return Path(path)
