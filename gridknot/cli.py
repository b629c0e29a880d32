"""
Command-line interface.

    gridknot show SOURCE
    gridknot moves SOURCE
    gridknot apply SOURCE MOVE [MOVE ...] [--output FILE.csv] [--keep-going]
    gridknot path SOURCE [--refine]
    gridknot catalog

SOURCE is either a .csv grid file or the name of a catalog diagram. Moves use
the notation of gridknot.moves.notation, e.g. ``commute:row:1``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional, TextIO

from gridknot.catalog import get_catalog
from gridknot.config import Settings, load_settings
from gridknot.diagram import GridDiagram, GridError, GridFileError, load_grid, save_grid
from gridknot.knot import build_knot_paths, component_count
from gridknot.logging_config import setup_logging
from gridknot.moves import apply_moves, available_moves, format_move, parse_move

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A user-facing failure that ends the command with a non-zero status."""


def load_source(source: str) -> GridDiagram:
    """Load a diagram from a .csv path or a catalog name."""
    if source.lower().endswith(".csv"):
        return load_grid(source)
    catalog = get_catalog()
    if source in catalog:
        return catalog.get(source)
    raise CommandError(f"{source!r} is neither a .csv file nor a catalog diagram")


def _print_summary(diagram: GridDiagram, out: TextIO) -> None:
    crossings = diagram.compute_crossings()
    print(diagram, file=out)
    print(f"size: {diagram.size}", file=out)
    print(f"components: {component_count(diagram)}", file=out)
    print(f"crossings: {len(crossings)}", file=out)
    for c in crossings:
        print(
            f"  ({c.row}, {c.col}) column {c.vertical_index} over row {c.horizontal_index}",
            file=out,
        )


def _cmd_show(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    _print_summary(load_source(args.source), out)
    return 0


def _cmd_moves(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    for move in available_moves(load_source(args.source)):
        print(format_move(move), file=out)
    return 0


def _cmd_apply(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    diagram = load_source(args.source)
    moves = [parse_move(text) for text in args.moves]
    result = apply_moves(diagram, moves, stop_on_error=not args.keep_going)
    for failure in result.failures:
        print(f"rejected {format_move(failure.move)}: {failure.error}", file=sys.stderr)
    _print_summary(diagram, out)
    if args.output and (result.passed or args.keep_going):
        save_grid(diagram, args.output)
    return 0 if result.passed else 1


def _cmd_path(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    diagram = load_source(args.source)
    for index, path in enumerate(build_knot_paths(diagram)):
        polyline = path.to_polyline(settings.path)
        if args.refine:
            polyline = polyline.refine(settings.path.refine_segment_length)
        print(f"# component {index}: {len(polyline)} vertices", file=out)
        for x, y, z in polyline.vertices:
            print(f"{x:.6f} {y:.6f} {z:.6f}", file=out)
    return 0


def _cmd_catalog(args: argparse.Namespace, settings: Settings, out: TextIO) -> int:
    catalog = get_catalog()
    for name in catalog.names():
        entry = catalog.entry(name)
        print(f"{name}: {entry.description}", file=out)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridknot", description="Inspect and transform knot grid diagrams."
    )
    parser.add_argument("--settings", type=Path, help="settings YAML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("--log-file", help="also write log output to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    show = sub.add_parser("show", help="print a diagram with its components and crossings")
    show.add_argument("source")
    show.set_defaults(handler=_cmd_show)

    moves = sub.add_parser("moves", help="list every move currently applicable")
    moves.add_argument("source")
    moves.set_defaults(handler=_cmd_moves)

    apply = sub.add_parser("apply", help="apply a sequence of Cromwell moves")
    apply.add_argument("source")
    apply.add_argument("moves", nargs="+", metavar="MOVE")
    apply.add_argument("-o", "--output", type=Path, help="write the result to this .csv file")
    apply.add_argument(
        "--keep-going", action="store_true", help="continue past rejected moves"
    )
    apply.set_defaults(handler=_cmd_apply)

    path = sub.add_parser("path", help="print the knot path as 3D vertices")
    path.add_argument("source")
    path.add_argument("--refine", action="store_true", help="subdivide long segments")
    path.set_defaults(handler=_cmd_path)

    catalog = sub.add_parser("catalog", help="list the named example diagrams")
    catalog.set_defaults(handler=_cmd_catalog)
    return parser


def main(argv: Optional[Sequence[str]] = None, out: TextIO = sys.stdout) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(args.settings)
    except (FileNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    setup_logging(logging.DEBUG if args.verbose else settings.log_level_number, args.log_file)

    try:
        return int(args.handler(args, settings, out))
    except (CommandError, GridError, GridFileError, ValueError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
