"""Command-line interface for the colorfinder project."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from .extract.normalize import MAX_SIDE, load_image
from .features.palette import (
    CAPTURE_COLOR_COUNT,
    DEFAULT_COLOR_COUNT,
    MATCH_COLOR_COUNT,
    extract_clusters,
    extract_colors_as_rgb,
)
from .features.region import DEFAULT_GRID_SIZE, find_matching_region
from .group.ranking import list_library_images, rank_library
from .group.similarity import MATCH_THRESHOLD
from .io.models import MatchReport, PixelGrid, Rgb
from .io.outputs import write_match_table, write_report


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments for the color analysis tools."""
    parser = argparse.ArgumentParser(
        description="Extract dominant colors and find images that share them."
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging for the analysis stages.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    palette = subparsers.add_parser(
        "palette", help="Print the dominant colors of an image."
    )
    palette.add_argument("image", help="Path to a JPEG or PNG image.")
    palette.add_argument(
        "--count",
        type=_positive_int,
        default=DEFAULT_COLOR_COUNT,
        help=f"Number of colors to extract (default {DEFAULT_COLOR_COUNT}).",
    )
    palette.add_argument(
        "--max-side",
        type=_positive_int,
        default=MAX_SIDE,
        help=f"Downscale bound for the longer side (default {MAX_SIDE}).",
    )
    palette.add_argument("--seed", type=int, default=None, help="Clustering seed.")

    region = subparsers.add_parser(
        "region", help="Locate the grid cell closest to a color."
    )
    region.add_argument("image", help="Path to a JPEG or PNG image.")
    region.add_argument(
        "--color", required=True, help="Target color as #RRGGBB."
    )
    region.add_argument(
        "--grid-size",
        type=_positive_int,
        default=DEFAULT_GRID_SIZE,
        help=f"Cells per side (default {DEFAULT_GRID_SIZE}).",
    )

    match = subparsers.add_parser(
        "match", help="Rank a folder of images by shared dominant color."
    )
    match.add_argument("image", help="Path to the captured object image.")
    match.add_argument(
        "--library",
        required=True,
        help="Directory of saved JPEG/PNG images to compare against.",
    )
    match.add_argument(
        "--out",
        default=None,
        help="Directory where matches.json and matches.parquet are written.",
    )
    match.add_argument(
        "--threshold",
        type=float,
        default=MATCH_THRESHOLD,
        help=f"Maximum score counted as a match (default {MATCH_THRESHOLD:.0f}).",
    )
    match.add_argument(
        "--grid-size",
        type=_positive_int,
        default=DEFAULT_GRID_SIZE,
        help=f"Cells per side for localisation (default {DEFAULT_GRID_SIZE}).",
    )
    match.add_argument("--seed", type=int, default=None, help="Clustering seed.")
    return parser.parse_args(list(argv) if argv is not None else None)


def _load(path: str) -> PixelGrid | None:
    try:
        return load_image(path)
    except (OSError, ValueError) as exc:
        print(f"[error] {path}: {exc}")
        return None


def _run_palette(args: argparse.Namespace) -> int:
    grid = _load(args.image)
    if grid is None:
        return 1
    clusters = extract_clusters(
        grid, args.count, max_side=args.max_side, rng=args.seed
    )
    if not clusters:
        print(f"[palette] {args.image}: no colors extracted")
        return 0
    print(f"[palette] {args.image}: {len(clusters)} colors ({grid.width}x{grid.height})")
    for index, cluster in enumerate(clusters, start=1):
        r, g, b = cluster.color
        print(
            f"  {index}. {cluster.color.hex} rgb({r}, {g}, {b})"
            f" population={cluster.population}"
        )
    return 0


def _run_region(args: argparse.Namespace) -> int:
    try:
        target = Rgb.from_hex(args.color)
    except ValueError as exc:
        print(f"[error] {exc}")
        return 1
    grid = _load(args.image)
    if grid is None:
        return 1
    rect = find_matching_region(grid, target, args.grid_size)
    if rect is None:
        print(f"[region] {args.image}: no region found for {target.hex}")
        return 0
    box = rect.to_pixels(grid.width, grid.height)
    print(
        f"[region] {args.image}: {target.hex} -> "
        f"({rect.left:.3f}, {rect.top:.3f}, {rect.right:.3f}, {rect.bottom:.3f})"
        f" pixels={box}"
    )
    return 0


def _run_match(args: argparse.Namespace) -> int:
    grid = _load(args.image)
    if grid is None:
        return 1
    target_palette = extract_colors_as_rgb(grid, CAPTURE_COLOR_COUNT, rng=args.seed)
    swatches = " ".join(color.hex for color in target_palette) or "(none)"
    print(f"[match] {args.image}: object colors {swatches}")

    try:
        paths = list_library_images(args.library)
    except FileNotFoundError as exc:
        print(f"[error] {exc}")
        return 1
    if not paths:
        print(f"[match] no saved images in {args.library}")

    results = rank_library(
        target_palette,
        paths,
        count=MATCH_COLOR_COUNT,
        grid_size=args.grid_size,
        threshold=args.threshold,
        rng=args.seed,
    )
    report = MatchReport(
        source=str(args.image),
        target_palette=target_palette,
        threshold=args.threshold,
        results=results,
    )
    for index, result in enumerate(results, start=1):
        if result.target is None:
            print(f"  {index}. {result.name} (no colors)")
            continue
        marker = "match" if result.matched else "-"
        rect_fragment = ""
        if result.rect is not None:
            rect_fragment = " rect=({:.3f}, {:.3f}, {:.3f}, {:.3f})".format(*result.rect)
        print(
            f"  {index}. {result.name} score={result.score:.1f} [{marker}]"
            f" via {result.target.hex}{rect_fragment}"
        )
    print(
        f"[match] {len(report.matched)} of {len(results)} images within "
        f"{args.threshold:.1f}"
    )

    if args.out:
        _write_outputs(report, Path(args.out))
    return 0


def _write_outputs(report: MatchReport, out_dir: Path) -> None:
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        json_path = write_report(out_dir / "matches.json", report)
        print(f"[output] wrote {json_path}")
    except OSError as exc:
        print(f"[warn] failed to write matches.json: {exc}")
        return
    if not report.results:
        return
    try:
        table_path = write_match_table(out_dir / "matches.parquet", report)
        print(f"[output] wrote {table_path}")
    except OSError as exc:
        print(f"[warn] failed to write matches.parquet: {exc}")


_COMMANDS = {
    "palette": _run_palette,
    "region": _run_region,
    "match": _run_match,
}


def main(argv: Iterable[str] | None = None) -> int:
    """Entry point for the CLI."""
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    return _COMMANDS[args.command](args)


if __name__ == "__main__":
    raise SystemExit(main())
