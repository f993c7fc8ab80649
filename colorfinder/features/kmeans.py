"""Fixed-iteration k-means over RGB points."""

from __future__ import annotations

import logging
from typing import Iterable, Protocol, Union

import numpy as np

from ..io.models import Cluster, Rgb
from .sampling import as_points

logger = logging.getLogger(__name__)

KMEANS_ITERATIONS = 15


class RandomDraw(Protocol):
    """The subset of ``numpy.random.Generator`` used to seed centroids."""

    def choice(self, a: int, size: int, replace: bool) -> np.ndarray: ...

    def permutation(self, x: int) -> np.ndarray: ...


RandomSource = Union[RandomDraw, int, None]


def kmeans_clusters(
    points: Iterable[Rgb] | np.ndarray,
    k: int,
    rng: RandomSource = None,
    iterations: int = KMEANS_ITERATIONS,
) -> list[Cluster]:
    """Cluster *points* into at most *k* colors.

    Centroids are seeded from *rng* (a ``numpy.random.Generator`` or any object
    with the same ``choice``/``permutation`` methods, an int seed, or ``None``
    for OS entropy), refined for exactly *iterations* rounds, and reported in
    centroid order with their final populations. When the input holds no more
    than *k* distinct colors, one centroid is seeded on each of them and fewer
    than *k* clusters are returned.
    """
    if iterations < 0:
        raise ValueError("iterations must be non-negative")

    data = as_points(points)
    if data.shape[0] == 0 or k <= 0:
        return []

    generator = _as_generator(rng)
    centroids = _initial_centroids(data, k, generator)

    for _ in range(iterations):
        labels = _assign(data, centroids)
        centroids = _update(data, labels, centroids)

    labels = _assign(data, centroids)
    counts = np.bincount(labels, minlength=len(centroids))

    clusters: list[Cluster] = []
    for index, centroid in enumerate(centroids):
        population = int(counts[index])
        if population:
            centre = data[labels == index].mean(axis=0)
        else:
            centre = centroid
        clusters.append(Cluster(_to_rgb(centre), population))
    return clusters


def _as_generator(rng: RandomSource) -> RandomDraw:
    if rng is None or isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)
    return rng


def _initial_centroids(data: np.ndarray, k: int, generator: RandomDraw) -> np.ndarray:
    distinct = np.unique(data, axis=0)
    if distinct.shape[0] <= k:
        if distinct.shape[0] < k:
            logger.debug(
                "Only %d distinct colors for k=%d; clamping k", distinct.shape[0], k
            )
        return distinct[generator.permutation(distinct.shape[0])].copy()
    indices = generator.choice(data.shape[0], size=k, replace=False)
    return data[indices].copy()


def _assign(data: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    # argmin returns the first minimum, so ties go to the lowest centroid index.
    distances = np.linalg.norm(data[:, None, :] - centroids[None, :, :], axis=2)
    return np.argmin(distances, axis=1)


def _update(data: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    updated = centroids.copy()
    for index in range(len(centroids)):
        members = data[labels == index]
        if len(members):
            updated[index] = members.mean(axis=0)
    return updated


def _to_rgb(values: np.ndarray) -> Rgb:
    rounded = np.clip(np.floor(np.asarray(values, dtype=np.float64) + 0.5), 0, 255)
    r, g, b = (int(channel) for channel in rounded)
    return Rgb(r, g, b)
