#!/usr/bin/env python3
"""almanac/main.py — CLI entry-point.

Usage examples
--------------
    # Lowest location over the (start, length) seed ranges of input.txt
    almanac solve

    # Seeds taken as individual values
    almanac solve puzzle.txt --mode seeds

    # Cross-check by enumerating every seed (small inputs only)
    almanac solve puzzle.txt --method brute-force --max-values 1000000

    # Print the composed seed→location intervals
    almanac -v dump puzzle.txt

Exit codes
----------
    0   Success.
    1   The input is malformed or describes an unusable almanac.
    2   Infrastructure failure (missing or unreadable file).
    3   Internal invariant violated (a bug).

The module doubles as ``python -m almanac`` via ``almanac/__main__.py``.
"""

from __future__ import annotations

import argparse
import logging
import sys
import textwrap
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

from . import __version__
from .arith import format_bound
from .bruteforce import DEFAULT_MAX_VALUES, min_location_bruteforce
from .errors import AlmanacError, InvariantViolation
from .parser import Almanac, load_almanac
from .pipeline import seed_to_location
from .query import min_location, min_location_of_seeds, pair_seed_ranges
from .total_function import TotalFunction

_log = logging.getLogger("almanac")

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2
EXIT_INTERNAL: int = 3

DEFAULT_INPUT: str = "input.txt"


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``almanac`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("almanac")
    root.setLevel(level)
    root.handlers[:] = [handler]


class _Timings:
    """Wall-clock time per phase, reported with ``--timing``."""

    def __init__(self) -> None:
        self.phases: Dict[str, float] = {}

    def phase(self, name: str) -> "_Timings._Timer":
        return _Timings._Timer(name, self)

    class _Timer:
        def __init__(self, name: str, owner: "_Timings") -> None:
            self.name = name
            self.owner = owner

        def __enter__(self) -> "_Timings._Timer":
            self.start = time.perf_counter()
            return self

        def __exit__(self, *args: Any) -> None:
            elapsed = time.perf_counter() - self.start
            self.owner.phases[self.name] = elapsed
            _log.debug("[%s] completed in %.6fs", self.name, elapsed)

    def report(self, stream: TextIO) -> None:
        for name, elapsed in self.phases.items():
            stream.write(f"{name:<10} {elapsed * 1000:10.3f} ms\n")
        total = sum(self.phases.values())
        stream.write(f"{'total':<10} {total * 1000:10.3f} ms\n")


def _load(raw: str) -> Almanac:
    path = Path(raw).expanduser()
    try:
        return load_almanac(path)
    except OSError as exc:
        _log.error("cannot read %s: %s", path, exc.strerror or exc)
        raise SystemExit(EXIT_INFRA)


def _format_function(function: TotalFunction) -> List[str]:
    lines = [f"# {function.domain} -> {function.codomain}: {len(function)} intervals"]
    for iv in function:
        lines.append(
            f"[{format_bound(iv.lower)}, {format_bound(iv.upper)}] shift={iv.shift:+d}"
        )
    return lines


# ===========================================================================
# Command handlers
# ===========================================================================

def cmd_solve(args: argparse.Namespace) -> int:
    """Handle the ``solve`` command."""
    timings = _Timings()

    with timings.phase("parse"):
        almanac = _load(args.input)

    if args.method == "brute-force":
        with timings.phase("enumerate"):
            ranges = pair_seed_ranges(almanac.seeds) if args.mode == "ranges" else None
            answer = min_location_bruteforce(almanac, ranges, max_values=args.max_values)
    else:
        with timings.phase("compose"):
            function = seed_to_location(almanac)
        with timings.phase("query"):
            if args.mode == "ranges":
                answer = min_location(pair_seed_ranges(almanac.seeds), function)
            else:
                answer = min_location_of_seeds(almanac.seeds, function)

    sys.stdout.write(f"{answer}\n")
    if args.timing:
        timings.report(sys.stderr)
    return EXIT_OK


def cmd_dump(args: argparse.Namespace) -> int:
    """Handle the ``dump`` command."""
    function = seed_to_location(_load(args.input))
    sys.stdout.write("\n".join(_format_function(function)) + "\n")
    return EXIT_OK


# ===========================================================================
# Argument parser
# ===========================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``almanac`` CLI."""
    parser = argparse.ArgumentParser(
        prog="almanac",
        description="Lowest location reachable from almanac seeds via composed interval maps.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""\
            examples:
              %(prog)s solve
              %(prog)s solve puzzle.txt --mode seeds
              %(prog)s solve puzzle.txt --method brute-force
              %(prog)s dump puzzle.txt
        """),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    # ── solve ───────────────────────────────────────────────────────────

    p_solve = subparsers.add_parser(
        "solve",
        help="Print the lowest location for the almanac's seeds",
    )
    p_solve.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Almanac file (default: {DEFAULT_INPUT})",
    )
    p_solve.add_argument(
        "--mode",
        choices=("ranges", "seeds"),
        default="ranges",
        help="Read seeds as (start, length) pairs or as individual values "
             "(default: ranges)",
    )
    p_solve.add_argument(
        "--method",
        choices=("composed", "brute-force"),
        default="composed",
        help="Compose the stages, or evaluate every seed stage by stage "
             "(default: composed)",
    )
    p_solve.add_argument(
        "--max-values",
        type=int,
        default=DEFAULT_MAX_VALUES,
        metavar="N",
        help=f"Refuse brute force beyond N seeds (default: {DEFAULT_MAX_VALUES})",
    )
    p_solve.add_argument(
        "--timing",
        action="store_true",
        help="Report elapsed time per phase on stderr",
    )
    p_solve.set_defaults(func=cmd_solve)

    # ── dump ────────────────────────────────────────────────────────────

    p_dump = subparsers.add_parser(
        "dump",
        help="Print the composed seed-to-location intervals",
    )
    p_dump.add_argument(
        "input",
        nargs="?",
        default=DEFAULT_INPUT,
        help=f"Almanac file (default: {DEFAULT_INPUT})",
    )
    p_dump.set_defaults(func=cmd_dump)

    return parser


# ===========================================================================
# Main
# ===========================================================================

def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the ``almanac`` CLI.

    Parameters
    ----------
    argv : sequence of str, optional
        Command-line arguments. Defaults to sys.argv[1:].

    Returns
    -------
    int
        Exit code (see module docstring).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        return args.func(args)
    except SystemExit as exc:
        return int(exc.code or 0)
    except InvariantViolation as exc:
        _log.critical("internal error: %s", exc)
        return EXIT_INTERNAL
    except AlmanacError as exc:
        _log.error("%s: %s", args.input, exc)
        return EXIT_ERROR
    except KeyboardInterrupt:
        sys.stderr.write("\nInterrupted.\n")
        return 130


if __name__ == "__main__":
    sys.exit(main())
