"""Utilities for turning decoded imagery into bounded pixel grids."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from ..io.models import PixelGrid

logger = logging.getLogger(__name__)

MAX_SIDE = 80

ImageLike = Union[PixelGrid, Image.Image, np.ndarray]


def as_pixel_grid(image: ImageLike) -> PixelGrid:
    """Return *image* as a :class:`PixelGrid` without copying when possible."""
    if isinstance(image, PixelGrid):
        return image
    if isinstance(image, Image.Image):
        return PixelGrid.from_image(image)
    if isinstance(image, np.ndarray):
        return PixelGrid.from_array(image)
    raise TypeError(
        "Expected a PixelGrid, PIL.Image.Image or numpy.ndarray, "
        f"got {type(image).__name__}"
    )


def decode_image(image_bytes: bytes) -> PixelGrid:
    """Decode encoded JPEG/PNG bytes into an RGB pixel grid."""
    if not image_bytes:
        raise ValueError("Empty image payload cannot be decoded")
    try:
        with Image.open(BytesIO(image_bytes)) as img:
            return PixelGrid.from_image(img.convert("RGB"))
    except UnidentifiedImageError as exc:
        raise ValueError("Image payload is not a recognised format") from exc
    except OSError as exc:
        raise ValueError(f"Image payload could not be decoded: {exc}") from exc


def load_image(path: str | Path) -> PixelGrid:
    """Read the image at *path* into an RGB pixel grid."""
    image_path = Path(path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image file does not exist: {image_path}")
    return decode_image(image_path.read_bytes())


def scale_to_max_side(image: ImageLike, max_side: int = MAX_SIDE) -> PixelGrid:
    """Shrink *image* so that its longer side is at most *max_side* pixels."""
    if max_side <= 0:
        raise ValueError("max_side must be a positive integer")

    grid = as_pixel_grid(image)
    width, height = grid.width, grid.height
    if grid.is_empty or (width <= max_side and height <= max_side):
        return grid

    # Integer arithmetic keeps the longer side at exactly max_side.
    longer = max(width, height)
    new_width = max(1, width * max_side // longer)
    new_height = max(1, height * max_side // longer)
    resized = cv2.resize(
        grid.pixels, (new_width, new_height), interpolation=cv2.INTER_AREA
    )
    logger.debug(
        "Downscaled %dx%d to %dx%d", width, height, new_width, new_height
    )
    return PixelGrid.from_array(resized)
