"""Rank a library of images by how well they share a target palette."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Sequence

from tqdm import tqdm

from ..extract.normalize import ImageLike, load_image
from ..features.kmeans import RandomSource
from ..features.palette import MATCH_COLOR_COUNT, extract_colors_as_rgb
from ..features.region import DEFAULT_GRID_SIZE, find_matching_region
from ..io.models import MatchResult, Rgb
from .similarity import (
    MATCH_THRESHOLD,
    NO_MATCH_SCORE,
    best_match_score,
    best_target_color,
    is_match,
)

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png")

ImagesMap = Mapping[str, ImageLike]


def list_library_images(folder: str | Path) -> list[Path]:
    """Return the JPEG/PNG files in *folder*, newest first."""
    root = Path(folder)
    if not root.is_dir():
        raise FileNotFoundError(f"Library folder does not exist: {root}")
    files = [
        path
        for path in root.iterdir()
        if path.is_file() and path.suffix.lower() in IMAGE_SUFFIXES
    ]
    return sorted(files, key=lambda path: path.stat().st_mtime, reverse=True)


def score_image(
    name: str,
    target_palette: Sequence[Rgb],
    image: ImageLike,
    count: int = MATCH_COLOR_COUNT,
    grid_size: int = DEFAULT_GRID_SIZE,
    threshold: float = MATCH_THRESHOLD,
    rng: RandomSource = None,
    path: Path | None = None,
) -> MatchResult:
    """Compare *target_palette* with *image* and localise the shared color."""
    palette = extract_colors_as_rgb(image, count, rng=rng)
    score = best_match_score(target_palette, palette)
    target = best_target_color(target_palette, palette)
    rect = None
    if target is not None:
        rect = find_matching_region(image, target, grid_size)
    return MatchResult(
        name=name,
        path=path,
        score=score,
        palette=palette,
        target=target,
        rect=rect,
        matched=is_match(score, threshold),
    )


def rank_images(
    target_palette: Sequence[Rgb],
    images: ImagesMap,
    count: int = MATCH_COLOR_COUNT,
    grid_size: int = DEFAULT_GRID_SIZE,
    threshold: float = MATCH_THRESHOLD,
    rng: RandomSource = None,
) -> list[MatchResult]:
    """Score every image in *images* against *target_palette*, best first."""
    results = [
        score_image(name, target_palette, image, count, grid_size, threshold, rng)
        for name, image in tqdm(
            images.items(), desc="Matching palettes", unit="image", leave=False
        )
    ]
    results.sort(key=lambda result: result.score)
    return results


def rank_library(
    target_palette: Sequence[Rgb],
    paths: Sequence[Path],
    count: int = MATCH_COLOR_COUNT,
    grid_size: int = DEFAULT_GRID_SIZE,
    threshold: float = MATCH_THRESHOLD,
    rng: RandomSource = None,
) -> list[MatchResult]:
    """Load and score the images at *paths*; unreadable files rank last."""
    results: list[MatchResult] = []
    for path in tqdm(paths, desc="Matching library", unit="image", leave=False):
        try:
            image = load_image(path)
        except (OSError, ValueError) as exc:
            logger.debug("Skipping unreadable library image %s: %s", path, exc)
            results.append(MatchResult(name=path.name, path=path, score=NO_MATCH_SCORE))
            continue
        results.append(
            score_image(
                path.name,
                target_palette,
                image,
                count,
                grid_size,
                threshold,
                rng,
                path=path,
            )
        )
    results.sort(key=lambda result: result.score)
    return results
