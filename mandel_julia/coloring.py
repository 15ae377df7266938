# mandel_julia/coloring.py
import numpy as np

from mandel_julia.results import Escaped, NonTerminated

INTERIOR = (0, 0, 0)

# hue ramp stops short of wrapping back to red
HUE_SPAN = 5.0 / 6.0


def normalize(n, quickest, slowest):
    """
    Linear rescale of an escape count into [0, 1] using the run's min/max.
    Returns 0 when quickest == slowest.
    """
    span = slowest - quickest
    if span == 0:
        return 0.0
    t = (n - quickest) / span
    return float(np.clip(t, 0.0, 1.0))


def grayscale(t):
    """
    Quickest escapes are white, slowest are black.
    """
    t = np.asarray(t, dtype=np.float64)
    gray = 1.0 - np.clip(t, 0.0, 1.0)
    rgb = np.stack([gray, gray, gray], axis=-1)
    return np.round(rgb * 255).astype(np.uint8)


def hue(t):
    """
    HSV ramp with full saturation and value; hue = t * 5/6.
    """
    t = np.clip(np.asarray(t, dtype=np.float64), 0.0, 1.0)
    h = t * HUE_SPAN
    return hsv_to_rgb(h, np.ones_like(h), np.ones_like(h))


def hsv_to_rgb(h, s, v):
    """
    h,s,v in [0,1]. Returns uint8 RGB with shape h.shape + (3,)
    """
    h = np.asarray(h, dtype=np.float64)
    s = np.asarray(s, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    i = np.floor(h * 6).astype(int)
    f = h * 6 - i
    p = v * (1 - s)
    q = v * (1 - f * s)
    t = v * (1 - (1 - f) * s)
    i_mod = np.asarray(np.mod(i, 6))
    choices = np.stack([
        np.stack([v, t, p], axis=-1),
        np.stack([q, v, p], axis=-1),
        np.stack([p, v, t], axis=-1),
        np.stack([p, q, v], axis=-1),
        np.stack([t, p, v], axis=-1),
        np.stack([v, p, q], axis=-1),
    ], axis=0)
    # pick one of the six sectors per element
    rgb = np.take_along_axis(choices, i_mod[None, ..., None], axis=0)[0]
    return np.round(np.clip(rgb, 0, 1) * 255).astype(np.uint8)


PALETTES = {
    "grayscale": grayscale,
    "hue": hue,
}


class ColourMapper:
    """
    Maps a Result to an (r, g, b) tuple.

    Built once per render from the aggregate statistics; calling it has
    no side effects, so one instance can colour every pixel.
    """

    def __init__(self, stats, palette="grayscale", interior=INTERIOR):
        if palette not in PALETTES:
            raise ValueError(f"Unknown palette: {palette} (choose from {sorted(PALETTES)})")
        self.quickest = stats.quickest_escape
        self.slowest = stats.slowest_escape
        self.palette = palette
        self.interior = tuple(int(v) for v in interior)
        self._ramp = PALETTES[palette]

    def normalize(self, result):
        """Position of an escaped result on the palette, in [0, 1]."""
        return normalize(result.iterations, self.quickest, self.slowest)

    def __call__(self, result):
        if isinstance(result, NonTerminated):
            return self.interior
        if isinstance(result, Escaped):
            rgb = self._ramp(np.array([self.normalize(result)]))[0]
            return tuple(int(v) for v in rgb)
        raise TypeError(f"Unknown result type: {type(result).__name__}")

    def __repr__(self):
        return f"ColourMapper(quickest={self.quickest}, slowest={self.slowest}, palette={self.palette!r})"
