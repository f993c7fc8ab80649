"""Stride-based pixel sampling and brightness filtering."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

import numpy as np

from ..io.models import PixelGrid, Rgb

logger = logging.getLogger(__name__)

MIN_BRIGHTNESS = 20
MAX_BRIGHTNESS = 235
_SAMPLES_PER_SIDE = 20


class SampledPixels:
    """Restartable, row-major view over every *step*-th pixel of a grid."""

    def __init__(self, grid: PixelGrid) -> None:
        self._grid = grid
        self.step = max(1, min(grid.width, grid.height) // _SAMPLES_PER_SIDE)

    def __iter__(self) -> Iterator[Rgb]:
        grid = self._grid
        for y in range(0, grid.height, self.step):
            for x in range(0, grid.width, self.step):
                yield grid.pixel(x, y)

    def __len__(self) -> int:
        cols = len(range(0, self._grid.width, self.step))
        rows = len(range(0, self._grid.height, self.step))
        return rows * cols

    def to_array(self) -> np.ndarray:
        """Return the sampled points as an ``(n, 3)`` float array."""
        view = self._grid.pixels[:: self.step, :: self.step]
        return view.reshape(-1, 3).astype(np.float64)


def sample_pixels(grid: PixelGrid) -> SampledPixels:
    """Return the stride sample of *grid* used for clustering."""
    return SampledPixels(grid)


def as_points(pixels: Iterable[Rgb] | np.ndarray) -> np.ndarray:
    """Return *pixels* as an ``(n, 3)`` float array."""
    if isinstance(pixels, SampledPixels):
        return pixels.to_array()
    points = np.asarray(
        pixels if isinstance(pixels, np.ndarray) else list(pixels),
        dtype=np.float64,
    )
    if points.size == 0:
        return np.empty((0, 3), dtype=np.float64)
    return points.reshape(-1, 3)


def filter_by_brightness(
    points: Iterable[Rgb] | np.ndarray,
    min_brightness: float = MIN_BRIGHTNESS,
    max_brightness: float = MAX_BRIGHTNESS,
) -> np.ndarray:
    """Keep points whose mean channel value lies within the brightness band."""
    arr = as_points(points)
    if arr.shape[0] == 0:
        return arr
    brightness = arr.sum(axis=1) / 3.0
    keep = (brightness >= min_brightness) & (brightness <= max_brightness)
    return arr[keep]


def select_cluster_source(
    points: Iterable[Rgb] | np.ndarray,
    count: int,
    min_brightness: float = MIN_BRIGHTNESS,
    max_brightness: float = MAX_BRIGHTNESS,
) -> np.ndarray:
    """Return the band-filtered points, or all points if fewer than *count* survive."""
    arr = as_points(points)
    filtered = filter_by_brightness(arr, min_brightness, max_brightness)
    if filtered.shape[0] >= count:
        return filtered
    logger.debug(
        "Brightness filter kept %d of %d points (< %d); using unfiltered sample",
        filtered.shape[0],
        arr.shape[0],
        count,
    )
    return arr
