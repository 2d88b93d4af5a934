"""Static four-way partition of the output raster.

Each quadrant is a rectangular, non-overlapping block of the global grid.
A worker writes only inside its own quadrant, so the shared buffer needs
no locking.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Quadrant:
    """A rectangular block of the output grid, in global cell indices."""
    col_off: int
    row_off: int
    width: int
    height: int
    quadrant_id: int

    @property
    def col_end(self) -> int:
        return self.col_off + self.width

    @property
    def row_end(self) -> int:
        return self.row_off + self.height

    @property
    def n_cells(self) -> int:
        return self.width * self.height


def generate_quadrants(
    total_width: int,
    total_height: int,
    split_x: int,
    split_y: int,
) -> list[Quadrant]:
    """Split the grid at (split_x, split_y) into four quadrants.

    Quadrants are returned south-west, north-west, south-east, north-east
    (row 0 is the southern-most row). Quadrants may be empty when a split
    lies on the grid edge.

    Args:
        total_width: Grid width in cells.
        total_height: Grid height in cells.
        split_x: First column of the eastern quadrants.
        split_y: First row of the northern quadrants.

    Returns:
        List of 4 Quadrant objects tiling the grid.
    """
    if not 0 <= split_x <= total_width or not 0 <= split_y <= total_height:
        raise ValueError(
            f"Split ({split_x}, {split_y}) outside grid "
            f"{total_width}x{total_height}"
        )

    east = total_width - split_x
    north = total_height - split_y
    return [
        Quadrant(col_off=0, row_off=0, width=split_x, height=split_y, quadrant_id=0),
        Quadrant(col_off=0, row_off=split_y, width=split_x, height=north, quadrant_id=1),
        Quadrant(col_off=split_x, row_off=0, width=east, height=split_y, quadrant_id=2),
        Quadrant(col_off=split_x, row_off=split_y, width=east, height=north, quadrant_id=3),
    ]
