"""Shared fixtures for the colorfinder tests: small synthetic images."""

import numpy as np
import pytest
from PIL import Image

from colorfinder.io.models import PixelGrid

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def solid(width, height, color):
    """Return a width x height grid filled with *color*."""
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :] = color
    return PixelGrid.from_array(arr)


@pytest.fixture
def quadrants():
    """8x8 grid of red, green, blue and white 4x4 quadrants."""
    arr = np.zeros((8, 8, 3), dtype=np.uint8)
    arr[:4, :4] = RED
    arr[:4, 4:] = GREEN
    arr[4:, :4] = BLUE
    arr[4:, 4:] = WHITE
    return PixelGrid.from_array(arr)


@pytest.fixture
def striped_image():
    """120x60 PIL image with four vertical bands of mid-brightness colors."""
    arr = np.zeros((60, 120, 3), dtype=np.uint8)
    arr[:, :30] = (200, 40, 40)
    arr[:, 30:60] = (40, 160, 60)
    arr[:, 60:90] = (50, 60, 190)
    arr[:, 90:] = (180, 170, 60)
    return Image.fromarray(arr)


@pytest.fixture
def write_png(tmp_path):
    """Return a helper that saves an RGB array as a PNG under tmp_path."""

    def _write(name, arr):
        path = tmp_path / name
        Image.fromarray(np.asarray(arr, dtype=np.uint8)).save(path)
        return path

    return _write


@pytest.fixture
def make_solid():
    return solid
