"""Per-quadrant rasterization worker."""

import logging
from dataclasses import dataclass
from typing import Callable

import numpy as np

from shapemask.data.rings import RingStore
from shapemask.raster.classify import classify_row
from shapemask.raster.quadrants import Quadrant
from shapemask.types import GridGeometry

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class QuadrantTask:
    """Immutable parameters handed to one worker before it starts.

    The grid and ring store are shared by reference between all workers
    and are never mutated during rasterization.
    """
    quadrant: Quadrant
    grid: GridGeometry
    store: RingStore
    water: bool = False


def log_progress(quadrant_id: int, percent: int) -> None:
    log.debug(f"Quadrant {quadrant_id} - {percent:03d}% processed")


def mask_quadrant(
    task: QuadrantTask,
    block: np.ndarray,
    completed: np.ndarray,
    progress: ProgressCallback | None = None,
) -> int:
    """Classify every cell of one quadrant into the shared buffer.

    Rows are processed south to north, columns west to east. Cell indices
    are global, so the quadrant writes ``block[row * width + col]`` for its
    own rows and columns only.

    Args:
        task: Quadrant, grid, rings and polarity for this worker.
        block: (height * width,) uint8 shared output buffer.
        completed: Shared per-quadrant completion flags; this worker sets
            only its own slot.
        progress: Called as ``progress(quadrant_id, percent)`` whenever the
            rounded percent of finished rows changes.

    Returns:
        Number of cells written.
    """
    if progress is None:
        progress = log_progress

    quad = task.quadrant
    grid = task.grid
    rows = block.reshape(grid.height, grid.width)

    lons = grid.column_longitudes(quad.col_off, quad.col_end)
    old_percent = -1
    written = 0

    for done, row in enumerate(range(quad.row_off, quad.row_end), 1):
        lat = grid.row_latitude(row)
        rows[row, quad.col_off:quad.col_end] = classify_row(
            lons, lat, task.store, water=task.water,
        )
        written += quad.width

        percent = int(100.0 * done / quad.height + 0.5)
        if percent != old_percent:
            progress(quad.quadrant_id, percent)
            old_percent = percent

    completed[quad.quadrant_id] = True
    return written
