"""
Per-pixel iteration results and the statistics pass over them.

A result is one of two frozen value types:
    Escaped(iterations)        -> left |z| <= 2 at that iteration
    NonTerminated(iterations)  -> never escaped; iterations == max_iterations
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Union


@dataclass(frozen=True)
class Escaped:
    iterations: int


@dataclass(frozen=True)
class NonTerminated:
    iterations: int


Result = Union[Escaped, NonTerminated]


class ResultGrid(Sequence):
    """
    Dense, read-only grid of results for a width x height render.

    Pixel (x, y) lives at linear index x * height + y.
    """

    def __init__(self, width: int, height: int, results: Sequence[Result]):
        if len(results) != width * height:
            raise ValueError(
                f"expected {width * height} results for a {width}x{height} grid, got {len(results)}"
            )
        self.width = width
        self.height = height
        self._results: Tuple[Result, ...] = tuple(results)

    @staticmethod
    def linear_index(x: int, y: int, height: int) -> int:
        return x * height + y

    def at(self, x: int, y: int) -> Result:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} grid")
        return self._results[self.linear_index(x, y, self.height)]

    def pixels(self) -> Iterator[Tuple[int, int, Result]]:
        """Yield (x, y, result) in storage order."""
        for x in range(self.width):
            for y in range(self.height):
                yield x, y, self._results[self.linear_index(x, y, self.height)]

    def __getitem__(self, i):
        return self._results[i]

    def __len__(self) -> int:
        return len(self._results)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultGrid):
            return NotImplemented
        return (self.width, self.height, self._results) == (other.width, other.height, other._results)

    def __repr__(self) -> str:
        return f"ResultGrid(width={self.width}, height={self.height})"


# Reported when nothing escaped (all interior, or an empty grid).
NO_ESCAPE = 0


@dataclass(frozen=True)
class Statistics:
    quickest_escape: int = NO_ESCAPE
    slowest_escape: int = NO_ESCAPE
    escaped_count: int = 0
    interior_count: int = 0

    @property
    def has_escapes(self) -> bool:
        return self.escaped_count > 0

    def __str__(self) -> str:
        lines = [
            f"quickest escape = {self.quickest_escape}",
            f"slowest escape  = {self.slowest_escape}",
            f"escaped points  = {self.escaped_count}",
            f"interior points = {self.interior_count}",
        ]
        return "\n".join(lines)


def aggregate(results: Iterable[Result]) -> Statistics:
    """
    Single pass over results; min/max iterations among Escaped only.

    An empty input or one without any Escaped result yields
    quickest_escape == slowest_escape == NO_ESCAPE.
    """
    quickest = None
    slowest = None
    escaped = 0
    interior = 0

    for result in results:
        if isinstance(result, Escaped):
            n = result.iterations
            escaped += 1
            if quickest is None or n < quickest:
                quickest = n
            if slowest is None or n > slowest:
                slowest = n
        elif isinstance(result, NonTerminated):
            interior += 1
        else:
            raise TypeError(f"Unknown result type: {type(result).__name__}")

    if escaped == 0:
        return Statistics(interior_count=interior)

    return Statistics(
        quickest_escape=quickest,
        slowest_escape=slowest,
        escaped_count=escaped,
        interior_count=interior,
    )

