"""Grid-based localisation of the region closest to a target color."""

from __future__ import annotations

import logging
import math

from ..extract.normalize import ImageLike, as_pixel_grid
from ..group.similarity import color_distance
from ..io.models import NormalizedRect, Rgb

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 8
_SAMPLES_PER_CELL_AXIS = 4


def find_matching_region(
    image: ImageLike, target: Rgb, grid_size: int = DEFAULT_GRID_SIZE
) -> NormalizedRect | None:
    """Return the grid cell of *image* whose mean color is closest to *target*.

    The image is split into ``grid_size`` x ``grid_size`` cells; each cell is
    averaged over a sparse sample of its pixels. The returned rect is expressed
    in fractions of the grid, so it does not shrink for clipped edge cells.
    """
    grid = as_pixel_grid(image)
    width, height = grid.width, grid.height
    if width <= 0 or height <= 0 or grid_size <= 0:
        return None

    pixels = grid.pixels
    cell_w = max(1, width // grid_size)
    cell_h = max(1, height // grid_size)

    best_distance = math.inf
    best_cell: tuple[int, int] | None = None
    for row in range(grid_size):
        for col in range(grid_size):
            x0, y0 = col * cell_w, row * cell_h
            x1, y1 = min(x0 + cell_w, width), min(y0 + cell_h, height)
            step_x = max(1, (x1 - x0) // _SAMPLES_PER_CELL_AXIS)
            step_y = max(1, (y1 - y0) // _SAMPLES_PER_CELL_AXIS)
            sample = pixels[y0:y1:step_y, x0:x1:step_x].reshape(-1, 3)
            if sample.shape[0] == 0:
                continue
            sums = sample.sum(axis=0, dtype=int)
            mean = Rgb(*(int(total) // sample.shape[0] for total in sums))
            distance = color_distance(target, mean)
            if distance < best_distance:
                best_distance = distance
                best_cell = (col, row)

    if best_cell is None:
        logger.debug("No grid cell of %dx%d image contained samples", width, height)
        return None

    col, row = best_cell
    return NormalizedRect(
        col / grid_size,
        row / grid_size,
        (col + 1) / grid_size,
        (row + 1) / grid_size,
    )
