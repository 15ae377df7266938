
import numpy as np
import pytest
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from mandel_julia.coloring import ColourMapper, INTERIOR, grayscale, hsv_to_rgb, hue, normalize
from mandel_julia.results import Escaped, NonTerminated, Statistics, aggregate


@pytest.fixture
def stats():
    return Statistics(quickest_escape=2, slowest_escape=9, escaped_count=4)


def test_normalize_endpoints(stats):
    mapper = ColourMapper(stats)
    assert mapper.normalize(Escaped(2)) == 0.0
    assert mapper.normalize(Escaped(9)) == 1.0
    assert 0.0 < mapper.normalize(Escaped(5)) < 1.0


def test_normalize_clamps():
    assert normalize(12, 2, 9) == 1.0
    assert normalize(1, 2, 9) == 0.0


def test_normalize_zero_span():
    assert normalize(4, 4, 4) == 0.0


def test_grayscale_extremes(stats):
    mapper = ColourMapper(stats, palette="grayscale")
    assert mapper(Escaped(2)) == (255, 255, 255)
    assert mapper(Escaped(9)) == (0, 0, 0)

    mid = mapper(Escaped(5))
    assert 0 < mid[0] < 255
    assert mid[0] == mid[1] == mid[2]


def test_hue_extremes(stats):
    mapper = ColourMapper(stats, palette="hue")
    assert mapper(Escaped(2)) == (255, 0, 0)
    assert mapper(Escaped(9)) == (255, 0, 255)
    mid = mapper(Escaped(5))
    assert mid not in {(255, 0, 0), (255, 0, 255)}


def test_interior_colour(stats):
    assert ColourMapper(stats)(NonTerminated(30)) == INTERIOR
    assert ColourMapper(stats, interior=(10, 20, 30))(NonTerminated(30)) == (10, 20, 30)


def test_all_interior_grid_maps_without_error():
    results = [NonTerminated(10)] * 4
    mapper = ColourMapper(aggregate(results))
    assert [mapper(r) for r in results] == [INTERIOR] * 4


def test_single_escape_count_maps_to_quickest_extreme():
    mapper = ColourMapper(aggregate([Escaped(3), Escaped(3), NonTerminated(10)]))
    assert mapper(Escaped(3)) == (255, 255, 255)


def test_mapper_is_pure(stats):
    mapper = ColourMapper(stats, palette="hue")
    first = [mapper(Escaped(n)) for n in range(2, 10)]
    second = [mapper(Escaped(n)) for n in range(2, 10)]
    assert first == second


def test_unknown_palette(stats):
    with pytest.raises(ValueError):
        ColourMapper(stats, palette="viridis")


def test_hsv_known_hues():
    h = np.array([0.0, 0.5, 0.25])
    rgb = hsv_to_rgb(h, np.ones_like(h), np.ones_like(h))
    np.testing.assert_array_equal(rgb, [[255, 0, 0], [0, 255, 255], [128, 255, 0]])


def test_hue_scalar_input():
    """t = 0.5 -> h = 5/12, sector 2 halfway: (p, v, t) = (0, 1, 0.5)."""
    rgb = hue(0.5)
    assert rgb.shape == (3,)
    np.testing.assert_array_equal(rgb, [0, 255, 128])


def test_palettes_keep_2d_shape():
    t = np.linspace(0.0, 1.0, 6).reshape(2, 3)
    for ramp in (grayscale, hue):
        rgb = ramp(t)
        assert rgb.shape == (2, 3, 3)
        np.testing.assert_array_equal(rgb.reshape(-1, 3), ramp(t.ravel()))
