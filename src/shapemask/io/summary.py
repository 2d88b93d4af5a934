"""Mask summary statistics."""

import json
import logging
from pathlib import Path

import numpy as np

log = logging.getLogger(__name__)


def compute_mask_statistics(
    block: np.ndarray,
    output_path: Path | None = None,
) -> dict:
    """Count land and water cells.

    Args:
        block: Mask cells (any shape), 1 = land, 0 = water.
        output_path: Optional JSON file to save the statistics to.

    Returns:
        Dict with n_cells, n_land, n_water and land_fraction.
    """
    n_cells = int(block.size)
    n_land = int(np.count_nonzero(block))
    stats = {
        "n_cells": n_cells,
        "n_land": n_land,
        "n_water": n_cells - n_land,
        "land_fraction": float(n_land / max(n_cells, 1)),
    }

    if output_path is not None:
        with open(output_path, "w") as f:
            json.dump(stats, f, indent=2)
        log.info(f"Mask statistics saved to {output_path}")

    return stats
