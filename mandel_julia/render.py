from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from mandel_julia.coloring import ColourMapper
from mandel_julia.config import ConfigError, FractalConfig, PlaneRegion
from mandel_julia.iterators import FractalKind, pick_iterator
from mandel_julia.results import ResultGrid, Statistics, aggregate


@dataclass(frozen=True)
class RenderOutput:
    grid: ResultGrid
    stats: Statistics
    pixels: np.ndarray


def plane_point(x, y, width, height, region):
    """Pixel (x, y) -> complex plane coordinate (no sub-pixel offset)."""
    dx = region.x_max - region.x_min
    dy = region.y_max - region.y_min
    x_ = ((float(x) * dx) / width) + region.x_min
    y_ = ((float(y) * dy) / height) + region.y_min
    return complex(x_, y_)


def sample_grid(
    width,
    height,
    region=PlaneRegion(),
    kind=FractalKind.MANDELBROT,
    max_iterations=30,
    c=0j,
):
    """
    Run the escape-time iteration once per pixel.

    Results are stored x-major: pixel (x, y) at index x * height + y.
    """
    if width <= 0 or height <= 0:
        raise ConfigError(f"grid must be non-empty, got {width}x{height}")
    if max_iterations < 1:
        raise ConfigError(f"max_iterations must be >= 1, got {max_iterations}")
    region.validate()

    iterator = pick_iterator(kind, c)

    results = [None] * (width * height)
    for x in range(width):
        for y in range(height):
            point = plane_point(x, y, width, height, region)
            results[ResultGrid.linear_index(x, y, height)] = iterator(point, max_iterations)

    return ResultGrid(width, height, results)


def draw_image(grid, mapper):
    """Apply the mapper to every cell -> (height, width, 3) uint8 RGB."""
    img = np.zeros((grid.height, grid.width, 3), dtype=np.uint8)
    for x, y, result in grid.pixels():
        img[y, x] = mapper(result)
    return img


def save_image(pixels, path):
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    im = Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))
    im.save(out_path)
    return out_path


def render(config: FractalConfig):
    """Sample, aggregate and colour one configured render."""
    config.validate()

    grid = sample_grid(
        config.width,
        config.height,
        region=config.region,
        kind=config.kind,
        max_iterations=config.max_iterations,
        c=config.c,
    )
    stats = aggregate(grid)
    mapper = ColourMapper(stats, palette=config.palette)
    pixels = draw_image(grid, mapper)
    return RenderOutput(grid=grid, stats=stats, pixels=pixels)
