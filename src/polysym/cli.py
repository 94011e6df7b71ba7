"""polysym command-line interface."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterator, List, Optional, Sequence

from .builders import SOLIDS
from .config import DEFAULT_LIMITS, MapLimits
from .context import SymmetryContext
from .errors import MalformedMapError, SymmetryInconsistencyError
from .groups import parse_group_pattern
from .io import FORMATS, load_codes, read_planar_code, save_codes
from .reporting import MapReport, analyse_codes, summarize, summary_lines


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--verbose", "-v", action="store_true", default=argparse.SUPPRESS, help="Log debug output")

    parser = argparse.ArgumentParser(description="Point groups of planar rotation systems", parents=[common])
    sub = parser.add_subparsers(dest="command", required=True)

    classify = sub.add_parser("classify", parents=[common], help="Report the point group of every map")
    classify.add_argument("--in", dest="input_path", help="Input file (default: stdin, planar_code)")
    classify.add_argument("--format", choices=FORMATS, default="auto")
    classify.add_argument("--only", dest="only", help="Report only maps with this group, e.g. Td, C2v, D*h")
    classify.add_argument("--details", action="store_true", help="Include group order and map sizes")
    classify.add_argument("--summary", action="store_true", help="Print group counts at the end")
    classify.add_argument("--max-vertices", type=int, default=DEFAULT_LIMITS.max_vertices)

    build = sub.add_parser("build", parents=[common], help="Write the rotation system of a standard solid")
    build.add_argument("--solid", choices=sorted(SOLIDS), required=True)
    build.add_argument("--n", type=int, default=5, help="Sides for pyramids, prisms and antiprisms")
    build.add_argument("--out", dest="output_path", required=True)
    build.add_argument("--format", choices=FORMATS, default="auto")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "classify":
        _cmd_classify(args)

    elif args.command == "build":
        _cmd_build(args)


def _read_codes(args) -> Iterator[List[int]]:
    if args.input_path is None:
        return read_planar_code(sys.stdin.buffer)
    return iter(load_codes(args.input_path, args.format))


def _cmd_classify(args) -> None:
    try:
        pattern = parse_group_pattern(args.only) if args.only else None
        limits = MapLimits(max_vertices=args.max_vertices)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(2)

    context = SymmetryContext(limits)
    reports: List[MapReport] = []
    try:
        for report in analyse_codes(_read_codes(args), context):
            reports.append(report)
            if pattern is not None and not pattern.matches(report.group):
                continue
            print(report.details() if args.details else report.line())
    except (MalformedMapError, SymmetryInconsistencyError) as exc:
        sys.stdout.flush()
        print(f"Graph {len(reports) + 1}: {exc} -- exiting!", file=sys.stderr)
        raise SystemExit(1)

    if args.summary:
        for line in summary_lines(summarize(reports)):
            print(line)


def _cmd_build(args) -> None:
    try:
        code = SOLIDS[args.solid](args.n)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        raise SystemExit(2)
    save_codes([code], args.output_path, args.format)
    print(f"Saved {args.output_path}")


if __name__ == "__main__":
    main()
