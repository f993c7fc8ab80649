import numpy as np
import pytest
from PIL import Image

from colorfinder.io.models import NormalizedRect, PixelGrid, Rgb


def test_rgb_hex_is_upper_case():
    assert Rgb(255, 0, 0).hex == "#FF0000"
    assert Rgb(10, 11, 12).hex == "#0A0B0C"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#0a0B0c", Rgb(10, 11, 12)),
        ("C81E1E", Rgb(200, 30, 30)),
        ("#fff", Rgb(255, 255, 255)),
        ("  #000000 ", Rgb(0, 0, 0)),
    ],
)
def test_rgb_from_hex(value, expected):
    assert Rgb.from_hex(value) == expected


@pytest.mark.parametrize("value", ["", "#12", "#GGGGGG", "#1234567"])
def test_rgb_from_hex_rejects_malformed(value):
    with pytest.raises(ValueError):
        Rgb.from_hex(value)


def test_normalized_rect_to_pixels():
    rect = NormalizedRect(0.25, 0.5, 0.5, 0.75)
    assert rect.to_pixels(200, 100) == (50, 50, 100, 75)


def test_pixel_grid_indexes_by_column_then_row():
    arr = np.zeros((2, 3, 3), dtype=np.uint8)
    arr[1, 2] = (1, 2, 3)
    grid = PixelGrid.from_array(arr)
    assert (grid.width, grid.height) == (3, 2)
    assert grid.pixel(2, 1) == Rgb(1, 2, 3)


def test_pixel_grid_from_array_drops_alpha_and_expands_gray():
    rgba = np.full((4, 5, 4), 7, dtype=np.uint8)
    assert PixelGrid.from_array(rgba).pixels.shape == (4, 5, 3)

    gray = np.full((4, 5), 9, dtype=np.uint8)
    grid = PixelGrid.from_array(gray)
    assert grid.pixel(0, 0) == Rgb(9, 9, 9)


def test_pixel_grid_from_array_rejects_bad_shape():
    with pytest.raises(ValueError):
        PixelGrid.from_array(np.zeros((4, 4, 2), dtype=np.uint8))


def test_pixel_grid_from_image_converts_mode():
    img = Image.new("L", (6, 4), color=128)
    grid = PixelGrid.from_image(img)
    assert (grid.width, grid.height) == (6, 4)
    assert grid.pixel(5, 3) == Rgb(128, 128, 128)


def test_empty_pixel_grid():
    grid = PixelGrid.from_array(np.zeros((0, 0, 3), dtype=np.uint8))
    assert grid.is_empty


def test_pixel_grid_coerces_wider_dtypes_to_uint8():
    grid = PixelGrid(np.array([[[300, -5, 120]]], dtype=np.int64))
    assert grid.pixels.dtype == np.uint8
    assert grid.pixels.flags["C_CONTIGUOUS"]
    assert grid.pixel(0, 0) == Rgb(255, 0, 120)
