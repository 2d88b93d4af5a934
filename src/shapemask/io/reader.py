"""Mask file decoding and point lookup."""

import logging
import re
from pathlib import Path
from typing import NamedTuple

import numpy as np

from shapemask.io.writer import END_OF_HEADER
from shapemask.types import GridGeometry

log = logging.getLogger(__name__)

_FIELD = re.compile(r"^\[(?P<key>[^\]]+)\]\s*=\s*(?P<value>.*)$")


class MaskHeader(NamedTuple):
    """Parsed mask file header."""
    header_size: int
    version: str
    creation_date: str
    start_lat: float
    start_lon: float
    lat_resolution: float
    lon_resolution: float
    height: int
    width: int
    resolution: int
    ns_difference: float

    @property
    def grid(self) -> GridGeometry:
        return GridGeometry(
            origin_lat=self.start_lat,
            origin_lon=self.start_lon,
            lat_resolution=self.lat_resolution,
            lon_resolution=self.lon_resolution,
            width=self.width,
            height=self.height,
            half_range_x=self.width // 2,
            half_range_y=self.height // 2,
        )


def parse_header(text: str) -> MaskHeader:
    """Parse the ASCII header fields of a mask file.

    Raises:
        ValueError: Missing [END OF HEADER] or a required field.
    """
    fields = {}
    for line in text.splitlines():
        line = line.strip()
        if line == END_OF_HEADER:
            break
        match = _FIELD.match(line)
        if match:
            fields[match["key"]] = match["value"].strip()
    else:
        raise ValueError("Mask header has no [END OF HEADER] line")

    try:
        return MaskHeader(
            header_size=int(fields["HEADER SIZE"]),
            version=fields.get("VERSION", ""),
            creation_date=fields.get("CREATION DATE", ""),
            start_lat=float(fields["START LAT"]),
            start_lon=float(fields["START LON"]),
            lat_resolution=float(fields["LAT RESOLUTION"]),
            lon_resolution=float(fields["LON RESOLUTION"]),
            height=int(fields["HEIGHT"]),
            width=int(fields["WIDTH"]),
            resolution=int(fields.get("NOMINAL BIN SIZE IN METERS", 0)),
            ns_difference=float(
                fields.get("NORTH SOUTH LON BIN SIZE DIFFERENCE IN METERS", 0.0)
            ),
        )
    except KeyError as exc:
        raise ValueError(f"Mask header missing field [{exc.args[0]}]") from exc


def read_mask_file(path: Path) -> tuple[MaskHeader, np.ndarray]:
    """Read a mask file.

    Returns:
        (header, cells) where cells is a (height, width) uint8 array with
        row 0 the southern-most row.

    Raises:
        ValueError: Malformed header or truncated cell data.
    """
    data = Path(path).read_bytes()
    end = data.find(END_OF_HEADER.encode("ascii"))
    if end < 0:
        raise ValueError(f"{path}: not a mask file (no [END OF HEADER])")
    header = parse_header(data[: end + len(END_OF_HEADER)].decode("ascii"))

    n_cells = header.width * header.height
    cells = np.frombuffer(data, dtype=np.uint8, offset=header.header_size)
    if cells.size != n_cells:
        raise ValueError(
            f"{path}: expected {n_cells:,} cells after header, found {cells.size:,}"
        )
    return header, cells.reshape(header.height, header.width)


def sample_mask(header: MaskHeader, cells: np.ndarray, lon: float, lat: float) -> int | None:
    """Mask value (1 land, 0 water) of the cell containing a point, None outside."""
    index = header.grid.cell_index(lon, lat)
    if index is None:
        return None
    return int(cells[index])
