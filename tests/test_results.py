
import pytest
from pathlib import Path
import sys

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from mandel_julia.results import (
    NO_ESCAPE,
    Escaped,
    NonTerminated,
    ResultGrid,
    Statistics,
    aggregate,
)


def test_aggregate_min_max_of_escaped_only():
    results = [Escaped(3), NonTerminated(50), Escaped(7), Escaped(2), NonTerminated(50), Escaped(9)]
    stats = aggregate(results)
    assert stats.quickest_escape == 2
    assert stats.slowest_escape == 9
    assert stats.escaped_count == 4
    assert stats.interior_count == 2
    assert stats.has_escapes


def test_aggregate_all_interior_uses_sentinel():
    stats = aggregate([NonTerminated(20)] * 6)
    assert stats.quickest_escape == NO_ESCAPE
    assert stats.slowest_escape == NO_ESCAPE
    assert stats.interior_count == 6
    assert not stats.has_escapes


def test_aggregate_empty():
    assert aggregate([]) == Statistics()


def test_aggregate_rejects_foreign_values():
    with pytest.raises(TypeError):
        aggregate([Escaped(1), 3])


def test_statistics_report():
    text = str(Statistics(quickest_escape=2, slowest_escape=9, escaped_count=4, interior_count=1))
    assert "quickest escape = 2" in text
    assert "slowest escape  = 9" in text


def test_grid_layout_is_x_major():
    width, height = 3, 2
    cells = [Escaped(x * 10 + y + 1) for x in range(width) for y in range(height)]
    grid = ResultGrid(width, height, cells)

    assert len(grid) == 6
    assert grid.at(0, 1) == Escaped(2)
    assert grid.at(2, 0) == Escaped(21)
    assert grid[ResultGrid.linear_index(1, 1, height)] == Escaped(12)
    assert [(x, y) for x, y, _ in grid.pixels()] == [(0, 0), (0, 1), (1, 0), (1, 1), (2, 0), (2, 1)]


def test_square_grid_index_matches_width_stride():
    n = 4
    for x in range(n):
        for y in range(n):
            assert ResultGrid.linear_index(x, y, n) == x * n + y


def test_grid_size_mismatch():
    with pytest.raises(ValueError):
        ResultGrid(2, 2, [Escaped(1)] * 3)


def test_grid_out_of_range():
    grid = ResultGrid(1, 1, [NonTerminated(5)])
    with pytest.raises(IndexError):
        grid.at(1, 0)
