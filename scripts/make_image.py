import argparse
import os
import sys
from dataclasses import replace

# Ensure repository root is on sys.path so `from mandel_julia...` works when
# running this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from mandel_julia.coloring import PALETTES
from mandel_julia.config import ConfigError, config_from_mapping, load_config
from mandel_julia.render import render, save_image


def build_parser():
    parser = argparse.ArgumentParser(description="Generates Mandelbrot and Julia fractals")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML file with render settings; flags override it")
    parser.add_argument("-g", "--geometry", type=str, default=None,
                        help="Geometry of the resulting image, eg 100x100")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="Name of output file (default out.gif)")
    parser.add_argument("-i", "--iterations", type=int, default=None,
                        help="Maximum number of iterations to test each point on (default 30)")
    parser.add_argument("--x-min", type=float, default=None, help="Minimum value of x")
    parser.add_argument("--x-max", type=float, default=None, help="Maximum value of x")
    parser.add_argument("--y-min", type=float, default=None, help="Minimum value of y")
    parser.add_argument("--y-max", type=float, default=None, help="Maximum value of y")
    parser.add_argument("--Cr", type=float, default=None,
                        help="Real part of C. Only meaningful with -j")
    parser.add_argument("--Ci", type=float, default=None,
                        help="Imaginary part of C. Only meaningful with -j")
    parser.add_argument("--palette", type=str, default=None, choices=sorted(PALETTES))
    parser.add_argument("-d", "--debug", action="store_true",
                        help="Print debug information. Also disables saving the image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    kind = parser.add_mutually_exclusive_group()
    kind.add_argument("-m", "--mandelbrot", dest="kind", action="store_const", const="mandelbrot",
                      help="Generate a Mandelbrot fractal (default)")
    kind.add_argument("-j", "--julia", dest="kind", action="store_const", const="julia",
                      help="Generate a Julia fractal")
    return parser


def config_from_args(args):
    overrides = dict(
        geometry=args.geometry,
        output=args.output,
        max_iterations=args.iterations,
        x_min=args.x_min,
        x_max=args.x_max,
        y_min=args.y_min,
        y_max=args.y_max,
        kind=args.kind,
        palette=args.palette,
        debug=args.debug or None,
        verbose=args.verbose or None,
    )
    if args.config is not None:
        cfg = load_config(args.config, **overrides)
    else:
        cfg = config_from_mapping(None, **overrides)

    # --Cr / --Ci each replace one part of c, keeping the other from the file
    if args.Cr is not None or args.Ci is not None:
        cr = cfg.c.real if args.Cr is None else args.Cr
        ci = cfg.c.imag if args.Ci is None else args.Ci
        cfg = replace(cfg, c=complex(cr, ci)).validate()
    return cfg


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = config_from_args(args)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if cfg.debug or cfg.verbose:
        print(cfg.describe())

    print(f"[run] kind={cfg.kind.value}, geometry={cfg.geometry}, max_iter={cfg.max_iterations}")
    out = render(cfg)

    if cfg.verbose:
        print(out.stats)

    if cfg.debug:
        print("[run] debug mode, image not saved.")
        return 0

    path = save_image(out.pixels, cfg.output)
    print(f"[run] saved to {path}")
    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
