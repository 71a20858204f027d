"""Console logging for the Quartiles solver.

Solver transcripts go to per-board log files (see `quartiles.solver.solver.run`); this module
only routes loguru messages to stderr at the level picked on the command line.
"""

import sys

from loguru import logger

CONSOLE_FORMAT = "<level>{message}</level>"
"""Plain format used for warnings and progress messages."""

DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <7}</level> "
    "<cyan>{name}:{function}:{line}</cyan> {message}"
)
"""Detailed format used with `--debug`."""


def console_level(verbose: bool = False, debug: bool = False) -> str:
    """Map the command line flags to a loguru level name.  `debug` wins over `verbose`."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    return "WARNING"


def setup_logger(verbose: bool = False, debug: bool = False) -> int:
    """Replace loguru's handlers with a single stderr handler.

    Returns:
        The id of the new handler, for `logger.remove`.
    """
    logger.remove()
    return logger.add(
        sys.stderr,
        level=console_level(verbose, debug),
        format=DEBUG_FORMAT if debug else CONSOLE_FORMAT,
        colorize=None,
    )
