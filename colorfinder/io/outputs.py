"""Output helpers for persisting match reports."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import pandas as pd

from .models import MatchReport, MatchResult


def result_row(result: MatchResult) -> dict[str, Any]:
    """Flatten *result* into a JSON/table friendly mapping."""
    finite = math.isfinite(result.score)
    return {
        "name": result.name,
        "path": str(result.path) if result.path else None,
        "score": float(result.score) if finite else None,
        "matched": bool(result.matched),
        "target": result.target.hex if result.target is not None else None,
        "palette": [color.hex for color in result.palette],
        "rect": list(result.rect) if result.rect is not None else None,
    }


def write_report(path: Path, report: MatchReport) -> Path:
    """Write *report* to *path* as JSON and return the path."""
    payload = {
        "source": report.source,
        "target_palette": [color.hex for color in report.target_palette],
        "threshold": float(report.threshold),
        "matched": len(report.matched),
        "results": [result_row(result) for result in report.results],
    }
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def write_match_table(path: Path, report: MatchReport) -> Path:
    """Write one row per scored image to a parquet table at *path*."""
    rows = []
    for result in report.results:
        row = result_row(result)
        rect = row.pop("rect") or [None] * 4
        row.update(dict(zip(("left", "top", "right", "bottom"), rect)))
        rows.append(row)
    df = pd.DataFrame(
        rows,
        columns=[
            "name",
            "path",
            "score",
            "matched",
            "target",
            "palette",
            "left",
            "top",
            "right",
            "bottom",
        ],
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(path, index=False, engine="pyarrow")
    return path
