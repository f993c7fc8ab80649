"""Dominant color palette extraction."""

from __future__ import annotations

import logging

from ..extract.normalize import MAX_SIDE, ImageLike, scale_to_max_side
from ..io.models import Cluster, Rgb
from .kmeans import KMEANS_ITERATIONS, RandomSource, kmeans_clusters
from .sampling import (
    MAX_BRIGHTNESS,
    MIN_BRIGHTNESS,
    sample_pixels,
    select_cluster_source,
)

logger = logging.getLogger(__name__)

DEFAULT_COLOR_COUNT = 12
MATCH_COLOR_COUNT = 6
CAPTURE_COLOR_COUNT = 5


def extract_clusters(
    image: ImageLike,
    count: int = DEFAULT_COLOR_COUNT,
    max_side: int = MAX_SIDE,
    min_brightness: float = MIN_BRIGHTNESS,
    max_brightness: float = MAX_BRIGHTNESS,
    iterations: int = KMEANS_ITERATIONS,
    rng: RandomSource = None,
) -> list[Cluster]:
    """Return up to *count* clusters of *image*, most populous first."""
    if count <= 0:
        return []

    grid = scale_to_max_side(image, max_side)
    samples = sample_pixels(grid)
    points = samples.to_array()
    if points.shape[0] == 0:
        return []

    source = select_cluster_source(points, count, min_brightness, max_brightness)
    clusters = kmeans_clusters(source, count, rng=rng, iterations=iterations)
    ranked = sorted(clusters, key=lambda cluster: cluster.population, reverse=True)
    logger.debug(
        "Clustered %d of %d sampled points (step %d) into %d colors",
        source.shape[0],
        points.shape[0],
        samples.step,
        len(ranked),
    )
    return ranked[:count]


def extract_colors(
    image: ImageLike, count: int = DEFAULT_COLOR_COUNT, **options
) -> list[str]:
    """Return the dominant colors of *image* as ``#RRGGBB`` display strings."""
    return [cluster.color.hex for cluster in extract_clusters(image, count, **options)]


def extract_colors_as_rgb(
    image: ImageLike, count: int = MATCH_COLOR_COUNT, **options
) -> list[Rgb]:
    """Return the dominant colors of *image* as RGB triplets for matching."""
    return [cluster.color for cluster in extract_clusters(image, count, **options)]
