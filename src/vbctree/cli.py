"""Command line entry point: ``vbctree vbcfile [options]``."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .constants import RANKDIRS, ProblemSense
from .errors import ConfigError, VbcError
from .runner import RunConfig, run

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vbctree",
        description="Generate Graphviz drawings of a branch-and-bound tree from a SCIP VBC file.",
    )
    parser.add_argument("log_path", metavar="vbcfile", help="VBC file written by the solver")
    parser.add_argument(
        "-o",
        "--output",
        help="Base name of generated files; suffixes are chosen automatically "
        "(default: vbcfile without suffix)",
    )
    parser.add_argument(
        "-r",
        "--rankdir",
        default="TB",
        choices=RANKDIRS,
        help="Drawing direction: top to bottom, left to right, bottom to top, right to left",
    )
    parser.add_argument(
        "-l", "--legend", action="store_true", help="Generate a legend in the output files"
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=float,
        default=0.0,
        help="Wait this many seconds after each intermediate drawing",
    )
    parser.add_argument(
        "-f",
        "--frequency",
        type=int,
        default=None,
        help="Draw the tree after every n-th record (default: final tree only)",
    )
    parser.add_argument(
        "-t",
        "--probtype",
        dest="sense",
        choices=[s.value for s in ProblemSense],
        default=None,
        help="Problem sense; use if the VBC file contains no primal bounds",
    )
    parser.add_argument(
        "-T",
        "--format",
        dest="formats",
        action="append",
        default=None,
        help="Graphviz output format, may be repeated (default: pdf)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Trace every record")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    options = vars(args)
    options.pop("verbose")
    try:
        summary = run(RunConfig.from_options(options))
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except (VbcError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    for result in summary.renders:
        for path in result.outputs:
            logger.info(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
