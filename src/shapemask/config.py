"""Configuration dataclasses for the shapemask pipeline."""

from dataclasses import dataclass, field
from pathlib import Path

VERSION = "shapemask V1.0.0 - 10/19/26"

# Static partition of the raster: one worker thread per quadrant
N_QUADRANTS = 4

WGS84_ELLIPSOID = "WGS84"


@dataclass(frozen=True)
class IOConfig:
    """Output encoding configuration."""
    header_size: int = 16384  # ASCII header, zero padded
    compression: str = "deflate"  # GeoTIFF export only
    tile_size: int = 256


@dataclass(frozen=True)
class MaskConfig:
    """Top-level mask generation configuration."""
    shapefile_path: Path = Path("mask.shp")
    resolution: int = 1  # Nominal bin size in metres
    water: bool = False  # Rings enclose water instead of land
    geotiff: bool = False  # Also write a GeoTIFF copy of the mask
    output_path: Path | None = None

    io: IOConfig = field(default_factory=IOConfig)

    @property
    def area_path(self) -> Path:
        return self.shapefile_path.with_suffix(".are")

    @property
    def mask_path(self) -> Path:
        if self.output_path is not None:
            return self.output_path
        return self.shapefile_path.with_suffix(".msk")

    @property
    def geotiff_path(self) -> Path:
        return self.mask_path.with_suffix(".tif")
