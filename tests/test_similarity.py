import math

import pytest

from colorfinder.group.similarity import (
    MAX_DISTANCE,
    NO_MATCH_SCORE,
    best_match_score,
    best_target_color,
    color_distance,
    is_match,
)
from colorfinder.io.models import Rgb

COLORS = [
    Rgb(0, 0, 0),
    Rgb(255, 255, 255),
    Rgb(12, 200, 77),
    Rgb(255, 0, 128),
]


@pytest.mark.parametrize("color", COLORS)
def test_distance_to_self_is_zero(color):
    assert color_distance(color, color) == 0


@pytest.mark.parametrize("a", COLORS)
@pytest.mark.parametrize("b", COLORS)
def test_distance_is_symmetric(a, b):
    assert color_distance(a, b) == color_distance(b, a)


def test_distance_known_values():
    assert color_distance(Rgb(0, 0, 0), Rgb(3, 4, 0)) == 5
    assert color_distance(Rgb(0, 0, 0), Rgb(255, 255, 255)) == pytest.approx(MAX_DISTANCE)
    assert MAX_DISTANCE == pytest.approx(441.67, abs=0.01)


def test_empty_palettes_have_no_match_score():
    palette = [Rgb(1, 2, 3)]
    assert best_match_score([], palette) == NO_MATCH_SCORE
    assert best_match_score(palette, []) == NO_MATCH_SCORE
    assert math.isinf(NO_MATCH_SCORE)
    assert best_target_color([], palette) is None


def test_best_match_is_closest_pair_across_palettes():
    target = [Rgb(255, 0, 0), Rgb(0, 0, 255)]
    candidate = [Rgb(0, 0, 250), Rgb(0, 255, 0)]
    assert best_match_score(target, candidate) == 5
    assert best_target_color(target, candidate) == Rgb(0, 0, 255)


def test_identical_color_scores_zero():
    assert best_match_score([Rgb(9, 9, 9), Rgb(1, 1, 1)], [Rgb(1, 1, 1)]) == 0


def test_match_threshold():
    assert is_match(80.0)
    assert not is_match(80.5)
    assert is_match(100.0, threshold=120.0)
    assert not is_match(NO_MATCH_SCORE)
