"""Data models shared across the color analysis pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, NamedTuple

import numpy as np
from PIL import Image


class Rgb(NamedTuple):
    """An 8-bit RGB triplet."""

    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    @classmethod
    def from_hex(cls, value: str) -> "Rgb":
        """Parse ``#RRGGBB``, ``RRGGBB`` or ``#RGB`` into an :class:`Rgb`."""
        if not isinstance(value, str):
            raise TypeError("Hex colors must be provided as strings")
        stripped = value.strip().lstrip("#")
        if len(stripped) == 3:
            stripped = "".join(ch * 2 for ch in stripped)
        if len(stripped) != 6:
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            return cls(*(int(stripped[i : i + 2], 16) for i in (0, 2, 4)))
        except ValueError as exc:
            raise ValueError(f"Invalid hex color: {value!r}") from exc


class NormalizedRect(NamedTuple):
    """Region expressed as fractions of the image width and height."""

    left: float
    top: float
    right: float
    bottom: float

    def to_pixels(self, width: int, height: int) -> tuple[int, int, int, int]:
        """Return the rect scaled to a *width* by *height* canvas."""
        return (
            int(round(self.left * width)),
            int(round(self.top * height)),
            int(round(self.right * width)),
            int(round(self.bottom * height)),
        )


@dataclass(frozen=True, slots=True, eq=False)
class PixelGrid:
    """Read-only view over a ``(height, width, 3)`` uint8 pixel array."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = np.asarray(self.pixels)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        object.__setattr__(self, "pixels", np.ascontiguousarray(arr))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def pixel(self, x: int, y: int) -> Rgb:
        r, g, b = self.pixels[y, x]
        return Rgb(int(r), int(g), int(b))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelGrid":
        """Wrap *array*, dropping alpha and broadcasting grayscale to RGB."""
        arr = np.asarray(array)
        if arr.ndim == 2:
            arr = np.repeat(arr[:, :, None], 3, axis=2)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported pixel array shape: {arr.shape}")
        if arr.shape[2] == 4:
            arr = arr[:, :, :3]
        return cls(arr)

    @classmethod
    def from_image(cls, img: Image.Image) -> "PixelGrid":
        rgb_image = img.convert("RGB") if img.mode != "RGB" else img
        width, height = rgb_image.size
        if width == 0 or height == 0:
            return cls(np.zeros((height, width, 3), dtype=np.uint8))
        return cls(np.asarray(rgb_image, dtype=np.uint8))


@dataclass(frozen=True, slots=True)
class Cluster:
    """A k-means centroid color and the number of points assigned to it."""

    color: Rgb
    population: int = 0


@dataclass(slots=True)
class MatchResult:
    """Comparison of a target palette against one library image."""

    name: str
    path: Path | None = None
    score: float = float("inf")
    palette: List[Rgb] = field(default_factory=list)
    target: Rgb | None = None
    rect: NormalizedRect | None = None
    matched: bool = False


@dataclass(slots=True)
class MatchReport:
    """Summary of a library matching run."""

    source: str
    target_palette: List[Rgb]
    threshold: float
    results: List[MatchResult] = field(default_factory=list)

    @property
    def matched(self) -> List[MatchResult]:
        return [result for result in self.results if result.matched]
