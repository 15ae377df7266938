from enum import Enum

from mandel_julia.results import Escaped, NonTerminated

# |z| > 2, compared on the squared magnitude
ESCAPE_RADIUS_SQUARED = 4.0


class FractalKind(Enum):
    MANDELBROT = "mandelbrot"
    JULIA = "julia"

    @classmethod
    def parse(cls, name):
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for kind in cls:
            if kind.value == key or kind.value[0] == key:
                return kind
        raise ValueError(f"Unknown fractal kind: {name}")


def iterate(z0: complex, c: complex, max_iterations: int):
    """
    Iterate z <- z^2 + c starting from z0.

    The escape test at step i looks at the value entering that step, so
    z0 itself is tested at i == 1. Returns Escaped(i) on the first step
    with x^2 + y^2 > 4, or NonTerminated(max_iterations).
    """
    x = float(z0.real)
    y = float(z0.imag)
    a = float(c.real)
    b = float(c.imag)

    for i in range(1, max_iterations + 1):
        xx = x * x
        yy = y * y
        if xx + yy > ESCAPE_RADIUS_SQUARED:
            return Escaped(i)
        y = 2 * x * y + b
        x = xx - yy + a

    return NonTerminated(max_iterations)


def seed(kind: FractalKind, point: complex, c: complex = 0j):
    """
    Return (z0, c) for a plane point.

    mandelbrot -> z0 = 0,     c = point
    julia      -> z0 = point, c = the fixed constant
    """
    if kind is FractalKind.MANDELBROT:
        return 0j, point
    if kind is FractalKind.JULIA:
        return point, c
    raise ValueError(f"Unknown fractal kind: {kind}")


def pick_iterator(kind, c: complex = 0j):
    """Return iterator(point, max_iterations) -> Result for the given kind."""
    kind = FractalKind.parse(kind)

    def iterator(point, max_iterations):
        z0, const = seed(kind, point, c)
        return iterate(z0, const, max_iterations)

    return iterator
