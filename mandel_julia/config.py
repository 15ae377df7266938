# mandel_julia/config.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from mandel_julia.coloring import PALETTES
from mandel_julia.iterators import FractalKind


class ConfigError(ValueError):
    """Invalid render configuration; raised before any sampling."""


@dataclass(frozen=True)
class PlaneRegion:
    x_min: float = -2.0
    x_max: float = 2.0
    y_min: float = -2.0
    y_max: float = 2.0

    def validate(self) -> None:
        bounds = (self.x_min, self.x_max, self.y_min, self.y_max)
        try:
            finite = all(math.isfinite(v) for v in bounds)
        except TypeError as e:
            raise ConfigError(f"region bounds must be numbers, got {bounds}") from e
        if not finite:
            raise ConfigError(f"region bounds must be finite, got {bounds}")
        if not self.x_min < self.x_max:
            raise ConfigError(f"x_min ({self.x_min}) must be less than x_max ({self.x_max})")
        if not self.y_min < self.y_max:
            raise ConfigError(f"y_min ({self.y_min}) must be less than y_max ({self.y_max})")


def _check_positive_int(name: str, value: Any) -> None:
    try:
        n = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}") from e
    if isinstance(value, bool) or n != value or n < 1:
        raise ConfigError(f"{name} must be a positive integer, got {value!r}")


@dataclass(frozen=True)
class FractalConfig:
    width: int = 100
    height: int = 100
    region: PlaneRegion = field(default_factory=PlaneRegion)
    kind: FractalKind = FractalKind.MANDELBROT
    c: complex = 0j  # only used for julia
    max_iterations: int = 30
    palette: str = "grayscale"
    output: str = "out.gif"
    debug: bool = False
    verbose: bool = False

    def validate(self) -> "FractalConfig":
        for name in ("width", "height", "max_iterations"):
            _check_positive_int(name, getattr(self, name))
        if not isinstance(self.kind, FractalKind):
            raise ConfigError(f"kind must be a FractalKind, got {self.kind!r}")
        if self.palette not in PALETTES:
            raise ConfigError(f"Unknown palette: {self.palette} (choose from {sorted(PALETTES)})")
        self.region.validate()
        return self

    @property
    def geometry(self) -> str:
        return f"{self.width}x{self.height}"

    def describe(self) -> str:
        """Human-readable dump used by --debug / --verbose."""
        if self.kind is FractalKind.JULIA:
            header = f"Generating Julia with (Cr, Ci) = ({self.c.real}, {self.c.imag})"
        else:
            header = "Generating Mandelbrot..."
        rows = [
            ("geometry", self.geometry),
            ("output file", self.output),
            ("debug", self.debug),
            ("verbose", self.verbose),
            ("max_iter", self.max_iterations),
            ("palette", self.palette),
            ("x_min", self.region.x_min),
            ("y_max", self.region.y_max),
            ("x_max", self.region.x_max),
            ("y_min", self.region.y_min),
        ]
        return "\n".join([header] + [f"{k:<11} = {v}" for k, v in rows])


_GEOMETRY_RE = re.compile(r"^\s*(\d+)\s*[xX]\s*(\d+)\s*$")


def parse_geometry(s: str) -> Tuple[int, int]:
    """
    Parse strings like '100x100' into (width, height).
    """
    m = _GEOMETRY_RE.match(str(s))
    if m is None:
        raise ConfigError(f"geometry must look like WIDTHxHEIGHT, got {s!r}")
    width, height = int(m.group(1)), int(m.group(2))
    if width <= 0 or height <= 0:
        raise ConfigError(f"geometry must be positive, got {s!r}")
    return width, height


def parse_complex(s) -> complex:
    """
    Parse strings like '0.3+0.5j' or '-0.4-0.6j' into a complex number.
    Also accepts plain reals and [re, im] pairs.
    """
    if isinstance(s, (list, tuple)):
        if len(s) != 2:
            raise ConfigError(f"complex pair must have two entries, got {s!r}")
        return complex(float(s[0]), float(s[1]))
    if isinstance(s, (int, float, complex)):
        return complex(s)
    s = str(s).strip().lower().replace(" ", "")
    try:
        if s.endswith("j"):
            return complex(s)
        # allow plain real numbers too
        return complex(float(s), 0.0)
    except ValueError as e:
        raise ConfigError(f"could not parse complex number {s!r}") from e


_FILE_KEYS = {
    "geometry", "width", "height", "kind", "c", "max_iterations",
    "region", "palette", "output",
}
_REGION_KEYS = {"x_min", "x_max", "y_min", "y_max"}


def config_from_mapping(mapping: Optional[Dict[str, Any]] = None, **overrides) -> FractalConfig:
    """
    Build a validated FractalConfig from a (YAML) mapping.

    Keyword overrides that are not None take precedence over the mapping.
    Region overrides use the flat names x_min / x_max / y_min / y_max.
    """
    mapping = dict(mapping or {})
    unknown = set(mapping) - _FILE_KEYS
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")

    region_cfg = mapping.pop("region", None) or {}
    if not isinstance(region_cfg, dict):
        raise ConfigError("region must be a mapping of x_min/x_max/y_min/y_max")
    bad = set(region_cfg) - _REGION_KEYS
    if bad:
        raise ConfigError(f"unknown region keys: {sorted(bad)}")

    values: Dict[str, Any] = {}
    if "geometry" in mapping:
        values["width"], values["height"] = parse_geometry(mapping.pop("geometry"))
    values.update(mapping)
    for key in _REGION_KEYS:
        if key in region_cfg:
            values[key] = region_cfg[key]

    if overrides.get("geometry") is not None:
        values["width"], values["height"] = parse_geometry(overrides.pop("geometry"))
    overrides.pop("geometry", None)
    values.update({k: v for k, v in overrides.items() if v is not None})

    default = FractalConfig()
    try:
        region = replace(
            default.region,
            **{k: float(values.pop(k)) for k in _REGION_KEYS if k in values},
        )
        cfg = replace(
            default,
            width=values.pop("width", default.width),
            height=values.pop("height", default.height),
            max_iterations=values.pop("max_iterations", default.max_iterations),
            kind=FractalKind.parse(values.pop("kind", default.kind)),
            c=parse_complex(values.pop("c", default.c)),
            region=region,
            **values,
        )
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e

    return cfg.validate()


def load_config(path: str | Path, **overrides) -> FractalConfig:
    """Load a YAML config file and apply command-line overrides."""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return config_from_mapping(data, **overrides)
