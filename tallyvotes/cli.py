"""Command line interface: tally a contests file against a votes file.

Usage:
    tally-votes contests.json votes.json
    tally-votes contests.csv votes.csv --tiebreak lowest-id -o results.json
    tally-votes https://example.com/contests.json votes.json --with-rejections
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from tallyvotes.analyze import TallyError, tally_sources
from tallyvotes.loaders import get_all_loaders
from tallyvotes.tiebreak import DEFAULT_TIEBREAK, get_all_tiebreakers

logger = logging.getLogger("tallyvotes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tally-votes",
        description="Tally votes per contest and report the winners as JSON")
    parser.add_argument("contests", help="Path or URL of the contest definitions")
    parser.add_argument("votes", help="Path or URL of the votes")
    parser.add_argument(
        "-t", "--tiebreak", default=DEFAULT_TIEBREAK,
        choices=[t.name for t in get_all_tiebreakers()],
        help=f"How to pick a winner among tied choices (default: {DEFAULT_TIEBREAK})")
    parser.add_argument(
        "-f", "--format",
        choices=[loader_class().name for loader_class in get_all_loaders()],
        help="Input format of both files (default: detect from name and content)")
    parser.add_argument("-o", "--output",
                        help="Write results to this file instead of stdout")
    parser.add_argument("--indent", type=int, default=2,
                        help="JSON indentation (default: 2)")
    parser.add_argument(
        "--with-rejections", action="store_true",
        help="Output an object with both results and rejected votes")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true",
                           help="Show debug messages")
    verbosity.add_argument("-q", "--quiet", action="store_true",
                           help="Do not report rejected votes")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr, level=level, format="[%(levelname)s] %(message)s")
    logger.setLevel(level)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        report = tally_sources(args.contests, args.votes,
                               format=args.format, tiebreak=args.tiebreak)
    except TallyError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if args.with_rejections:
        body = {
            "results": report.results_to_list(),
            "rejections": [r.to_dict() for r in report.outcome.rejections],
        }
    else:
        body = report.results_to_list()
    output = json.dumps(body, indent=args.indent, ensure_ascii=False)

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"[ERROR] Could not write output file {output_path}: "
                  f"{e.strerror or e}", file=sys.stderr)
            return 1
        logger.info("Written to %s", output_path)
    else:
        print(output)
    return 0
