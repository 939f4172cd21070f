import argparse
import sys

from .config import DEFAULT_CENTER, SHADER, VARIANTS, ViewerConfig
from .precision import DEFAULT_PRECISION


def build_parser():
    parser = argparse.ArgumentParser(
        prog="pymandel",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--variant",
        choices=VARIANTS,
        default=SHADER,
        help=(
            "shader: evaluate every pixel on the GPU in single precision; "
            "decimal: evaluate every pixel on the CPU in arbitrary precision"
        ),
    )
    parser.add_argument(
        "--dims",
        type=int,
        default=None,
        nargs=2,
        metavar=("WIDTH", "HEIGHT"),
        help="The dimensions of the window or output image, in pixels "
        "(800 600 for shader, 160 120 for decimal)",
    )
    parser.add_argument(
        "--zoom",
        default=None,
        help="the initial zoom (0.5 for shader, 200 pixels per unit for decimal)",
    )
    parser.add_argument(
        "--center",
        default=list(DEFAULT_CENTER),
        nargs=2,
        metavar=("RE", "IM"),
        help="The initial center of the view in the complex plane",
    )
    parser.add_argument(
        "--imax",
        type=int,
        default=None,
        help="the max iterations to perform (100 for shader, 1000 for decimal)",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        help="significant digits for the decimal variant",
    )
    parser.add_argument(
        "--backend",
        choices=["decimal", "mpmath"],
        default="decimal",
        help="arbitrary precision arithmetic used by the decimal variant",
    )
    parser.add_argument(
        "-o",
        "--out-file",
        default=None,
        help="render a single frame to this image file instead of opening a window",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="print progress and timing information",
    )
    return parser


def parse_config(argv=None) -> ViewerConfig:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.dims is not None and min(args.dims) < 1:
        parser.error("--dims must be positive")
    if args.imax is not None and args.imax < 1:
        parser.error("--imax must be positive")
    if args.precision < 1:
        parser.error("--precision must be positive")

    config = ViewerConfig(
        variant=args.variant,
        dims=tuple(args.dims) if args.dims is not None else None,
        zoom=args.zoom,
        center=tuple(args.center),
        imax=args.imax,
        precision=args.precision,
        backend=args.backend,
        out_file=args.out_file,
        verbose=args.verbose,
    )
    try:
        config.make_viewport(config.make_backend())
    except (ValueError, ArithmeticError) as e:
        parser.error(f"invalid view: {e}")
    return config


def main(argv=None):
    config = parse_config(argv)

    if config.verbose:
        print(f"variant: {config.variant}")
        print(f"dims: {config.dims}")
        print(f"zoom: {config.zoom}")
        print(f"center: {config.center}")
        print(f"imax: {config.imax}")

    if config.out_file:
        from .snapshot import render_snapshot

        render_snapshot(config)
        return 0

    from .viewer import MandelbrotViewer

    return MandelbrotViewer(config).run()


if __name__ == "__main__":
    sys.exit(main())
