"""Similarity scoring between color palettes."""

from __future__ import annotations

import math
from typing import Sequence

from ..io.models import Rgb

MAX_DISTANCE: float = math.sqrt(3 * 255**2)
NO_MATCH_SCORE: float = math.inf
MATCH_THRESHOLD: float = 80.0


def color_distance(a: Sequence[int], b: Sequence[int]) -> float:
    """Return the Euclidean distance between two RGB colors."""
    return math.sqrt(
        (a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2 + (a[2] - b[2]) ** 2
    )


def best_match_score(target: Sequence[Rgb], candidate: Sequence[Rgb]) -> float:
    """Return the smallest nearest-color distance from *target* into *candidate*.

    Lower is better; ``NO_MATCH_SCORE`` when either palette is empty.
    """
    if not target or not candidate:
        return NO_MATCH_SCORE
    return min(_nearest_distance(color, candidate) for color in target)


def best_target_color(target: Sequence[Rgb], candidate: Sequence[Rgb]) -> Rgb | None:
    """Return the color of *target* that aligns best with *candidate*."""
    if not target or not candidate:
        return None
    return min(target, key=lambda color: _nearest_distance(color, candidate))


def is_match(score: float, threshold: float = MATCH_THRESHOLD) -> bool:
    return score <= threshold


def _nearest_distance(color: Rgb, palette: Sequence[Rgb]) -> float:
    return min(color_distance(color, other) for other in palette)
