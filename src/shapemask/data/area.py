"""Generic area (.are) file reader.

An area file lists the vertices of the polygon that the mask must cover,
one ``lat, lon`` pair per line. Positions are either signed decimal
degrees or degrees[-minutes[-seconds]] with a trailing hemisphere letter::

    # lat, lon
    30-15-00.00N, 088-30-00.00W
    30.5, -88.25

Only the minimum bounding rectangle of the vertices is used downstream.
"""

import logging
import re
from pathlib import Path
from typing import NamedTuple

from shapemask.types import BoundingBox

log = logging.getLogger(__name__)

_HEMISPHERES = {"lat": "NS", "lon": "EW"}
_LIMITS = {"lat": 90.0, "lon": 360.0}
_SPLIT = re.compile(r"[,\s]+")


class AreaFileError(ValueError):
    """Area file is missing or cannot be parsed."""


class AreaDescriptor(NamedTuple):
    """Vertices of the area polygon and their bounding rectangle.

    vertices: list of (lon, lat) pairs in file order
    bounds: envelope of the vertices
    """
    vertices: list[tuple[float, float]]
    bounds: BoundingBox


def parse_position(text: str, axis: str) -> float:
    """Parse one latitude or longitude string into decimal degrees.

    Args:
        text: Decimal degrees (``-88.5``) or hemisphere form
            (``88-30-00.0W``, ``30-15N``, ``30N``).
        axis: ``"lat"`` or ``"lon"``.

    Returns:
        Signed decimal degrees.

    Raises:
        ValueError: Unparseable value, wrong hemisphere or out of range.
    """
    value = text.strip().upper()
    if not value:
        raise ValueError(f"Empty {axis} value")

    sign = 1.0
    if value[-1].isalpha():
        hemi = value[-1]
        if hemi not in _HEMISPHERES[axis]:
            raise ValueError(f"Invalid hemisphere '{hemi}' for {axis}: {text!r}")
        if hemi in "SW":
            sign = -1.0
        value = value[:-1]
        parts = value.split("-")
        if not 1 <= len(parts) <= 3:
            raise ValueError(f"Invalid {axis} value: {text!r}")
        degrees = 0.0
        for scale, part in zip((1.0, 60.0, 3600.0), parts):
            degrees += float(part) / scale
    else:
        degrees = float(value)

    degrees *= sign
    if abs(degrees) > _LIMITS[axis]:
        raise ValueError(f"{axis} out of range: {text!r}")
    return degrees


def read_area_file(path: Path) -> AreaDescriptor:
    """Read an area file and compute its bounding rectangle.

    Raises:
        AreaFileError: File missing, unreadable, malformed, or describing
            a degenerate (zero width or height) area.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError as exc:
        raise AreaFileError(f"Area file not found: {path}") from exc
    except OSError as exc:
        raise AreaFileError(f"Cannot read area file {path}: {exc}") from exc

    vertices = []
    for line_no, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        fields = [f for f in _SPLIT.split(line) if f]
        if len(fields) != 2:
            raise AreaFileError(f"{path}:{line_no}: expected 'lat, lon', got {line!r}")
        try:
            lat = parse_position(fields[0], "lat")
            lon = parse_position(fields[1], "lon")
        except ValueError as exc:
            raise AreaFileError(f"{path}:{line_no}: {exc}") from exc
        vertices.append((lon, lat))

    if len(vertices) < 2:
        raise AreaFileError(f"{path}: need at least 2 vertices, found {len(vertices)}")

    lons = [v[0] for v in vertices]
    lats = [v[1] for v in vertices]
    bounds = BoundingBox(min(lons), min(lats), max(lons), max(lats))
    if bounds.max_lon <= bounds.min_lon or bounds.max_lat <= bounds.min_lat:
        raise AreaFileError(f"{path}: area has zero width or height ({bounds})")

    log.info(
        f"Area {path.name}: {len(vertices)} vertices, "
        f"lon [{bounds.min_lon:.6f}, {bounds.max_lon:.6f}], "
        f"lat [{bounds.min_lat:.6f}, {bounds.max_lat:.6f}]"
    )
    return AreaDescriptor(vertices=vertices, bounds=bounds)
