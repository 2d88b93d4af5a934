"""Threaded quadrant dispatch.

The raster is split into four static quadrants and each is classified by
its own thread. Quadrants are disjoint index ranges of one shared buffer,
so workers never coordinate; the driver waits on every worker before the
buffer is used.

    Thread 0:  [SW rows 0..hy)  ─────────┐
    Thread 1:  [NW rows hy..H)  ─────────┤
    Thread 2:  [SE rows 0..hy)  ─────────┤ join all ──> block
    Thread 3:  [NE rows hy..H)  ─────────┘

Overlap between the threads is best effort. Each row is a Python loop over
rings issuing small numpy calls, so most of the time is spent holding the
GIL; only the larger array operations release it.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from shapemask.config import N_QUADRANTS
from shapemask.data.rings import RingStore
from shapemask.distributed.worker import ProgressCallback, QuadrantTask, mask_quadrant
from shapemask.raster.quadrants import generate_quadrants
from shapemask.types import GridGeometry, RasterResult

log = logging.getLogger(__name__)


def rasterize_mask(
    grid: GridGeometry,
    store: RingStore,
    water: bool = False,
    progress: ProgressCallback | None = None,
) -> RasterResult:
    """Classify every cell of the grid against the ring store.

    Args:
        grid: Output grid geometry.
        store: Frozen ring store, shared read-only by all workers.
        water: Rings enclose water instead of land.
        progress: Optional per-quadrant progress callback.

    Returns:
        RasterResult with the flat row-major uint8 block and the
        per-quadrant completion flags.

    Raises:
        MemoryError: Output buffer could not be allocated.
        Exception: Any worker failure, re-raised when that worker is joined.
    """
    block = np.zeros(grid.n_cells, dtype=np.uint8)
    completed = np.zeros(N_QUADRANTS, dtype=bool)

    quadrants = generate_quadrants(
        grid.width, grid.height, grid.half_range_x, grid.half_range_y
    )
    tasks = [QuadrantTask(quadrant=q, grid=grid, store=store, water=water) for q in quadrants]

    log.info(
        f"Rasterizing {grid.width}x{grid.height} cells against {len(store)} rings "
        f"with {len(tasks)} threads"
    )
    t_start = time.time()

    written = 0
    with ThreadPoolExecutor(max_workers=N_QUADRANTS, thread_name_prefix="mask") as pool:
        futures = [
            pool.submit(mask_quadrant, task, block, completed, progress)
            for task in tasks
        ]
        # Blocking join on every worker
        for future in futures:
            written += future.result()

    if written != grid.n_cells or not completed.all():
        raise RuntimeError(
            f"Rasterization incomplete: {written:,}/{grid.n_cells:,} cells, "
            f"completed={completed.tolist()}"
        )

    log.info(f"Rasterization complete: {written:,} cells, {time.time() - t_start:.1f}s")
    return RasterResult(block=block, completed=completed)
