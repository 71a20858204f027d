"""Quartiles Puzzle Solver.

Quartiles is a word puzzle played on a 5x4 grid of letter fragments, cut from five long
words.  Words are formed by joining one to four distinct fragments; the puzzle is won by
rebuilding the five long words, and other valid words score extra.  This program finds
every word a dictionary allows on a given board.
"""

import argparse
import sys

from loguru import logger

from .dictionary import DictionaryLoadError, open_dictionary
from .log import setup_logger
from .puzzle_config import PuzzleConfig, load_configs
from .solver.config import config as solver_config
from .solver.solver import run


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(prog="quartiles", description="Quartiles puzzle solver")
    parser.add_argument(
        "-d",
        "--directory",
        default=solver_config.dictionary_dir,
        help="Directory containing the dictionary files (default: %(default)s)",
    )
    parser.add_argument(
        "-n",
        "--dictionary",
        default=solver_config.dictionary_name,
        help="Dictionary name shared by the .txt and .dict files (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show progress messages")
    parser.add_argument("--debug", action="store_true", help="Show debug messages")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("generate", help="Just generate the binary dictionary and exit")

    solve = subparsers.add_parser("solve", help="Solve the boards in a puzzle file")
    source = solve.add_mutually_exclusive_group(required=True)
    source.add_argument("puzzle_file", nargs="?", help="Path to a puzzle file")
    source.add_argument(
        "--board",
        help="A single board as 20 whitespace-separated fragments, in row-major order",
    )
    solve.add_argument(
        "-q", "--quiet", action="store_true", help="Suppress emission of the solution words"
    )
    solve.add_argument(
        "--time-slice",
        type=float,
        default=solver_config.time_slice,
        help="Seconds per solver time slice (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Quartiles solver."""
    args = build_parser().parse_args(argv)
    setup_logger(verbose=args.verbose, debug=args.debug)

    try:
        dictionary = open_dictionary(args.directory, args.dictionary)
    except DictionaryLoadError as e:
        logger.error("{}", e)
        print(
            f"Failed to open dictionary: {args.directory}/{args.dictionary}.dict "
            f"or {args.directory}/{args.dictionary}.txt",
            file=sys.stderr,
        )
        return 1
    logger.info("Loaded {} words", len(dictionary))

    if args.command == "generate":
        logger.info("Exiting after generating binary dictionary")
        return 0

    try:
        if args.board is not None:
            configs = [PuzzleConfig.from_fragments(args.board.split())]
        else:
            configs = load_configs(args.puzzle_file)
    except (OSError, ValueError) as e:
        print(f"Invalid puzzle: {e}", file=sys.stderr)
        return 1

    for config in configs:
        result = run(config, dictionary, time_slice=args.time_slice)
        if not args.quiet:
            for word in result.solution():
                print(word)
        status = "solved" if result.is_solved() else "no solution"
        print(f"{config.name}/{config.index}: {status}")
    return 0
