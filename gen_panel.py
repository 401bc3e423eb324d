"""Generate a laser-cut panel outline SVG from rectangles, or normalize an existing SVG.

    python gen_panel.py build --rect 0,0,40,60 --rect 10,0,20,30 -o panel.svg
    python gen_panel.py normalize drawing.svg -o clean.svg
"""
import argparse
from collections.abc import Sequence

from panelcut import (
    Rectangle, Owned, SvgDocument, PathDataError, build_shape, setup_logging,
)
from panelcut.constants import (
    DEFAULT_MARGIN, DEFAULT_STROKE_WIDTH, DEFAULT_STROKE_COLOR, DEFAULT_UNIT,
)


def parse_rect(text: str) -> Rectangle:
    """'x,y,w,h' -> Rectangle."""
    parts = text.split(",")
    if len(parts) != 4:
        raise argparse.ArgumentTypeError(f"Expected x,y,width,height, got {text!r}")
    try:
        return Rectangle(*(float(p) for p in parts))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Non-numeric rectangle: {text!r}") from None


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build or normalize panel outline SVGs.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Combine rectangles into one outline")
    build.add_argument("--rect", type=parse_rect, action="append", required=True,
                       metavar="X,Y,W,H", help="Rectangle to combine (repeatable, in order)")
    build.add_argument("--ordered", action="store_true",
                       help="Earlier rectangles keep shared edges (default: cancel on both sides)")
    build.add_argument("--stroke-width", type=float, default=DEFAULT_STROKE_WIDTH)
    build.add_argument("--stroke-color", default=DEFAULT_STROKE_COLOR)
    build.add_argument("--unit", default=DEFAULT_UNIT)
    build.add_argument("--margin", type=float, default=DEFAULT_MARGIN,
                       help=f"Canvas margin around the outline (default: {DEFAULT_MARGIN})")
    build.add_argument("-o", "--output", required=True, help="Destination SVG path")

    norm = sub.add_parser("normalize", help="Import an SVG and re-export its paths")
    norm.add_argument("input", help="Source SVG path")
    norm.add_argument("-o", "--output", required=True, help="Destination SVG path")
    return parser.parse_args(argv)


def build_panel(args: argparse.Namespace) -> SvgDocument:
    shape = build_shape(args.rect, symmetrical=not args.ordered)
    doc = SvgDocument(stroke_width=args.stroke_width, stroke_color=args.stroke_color,
                      unit=args.unit)
    doc.add(Owned(shape))
    doc.resize_to_fit_content(args.margin, offset_content=True)
    doc.auto_resize = False
    return doc


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "build":
        doc = build_panel(args)
    else:
        try:
            doc = SvgDocument.read_svg(args.input)
        except (PathDataError, OSError) as e:
            print(f"Could not read {args.input}: {e}")
            return 1

    doc.write_svg(args.output)
    n_paths = len(doc.path_data())
    print(f"Outline written to {args.output}")
    print(f"Canvas: {doc.width:.2f} x {doc.height:.2f} {doc.attributes.unit}, {n_paths} path(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
