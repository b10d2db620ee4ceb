"""Logging for the cukejson command line.

Records from the ``cukejson`` package go to a Rich handler on stderr. stdout
is left to the report, so ``cukejson format > cucumber.json`` stays clean.
"""

import logging
from enum import IntEnum

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "cukejson"


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG

    @classmethod
    def from_flags(cls, verbosity: int, quiet: bool, debug: bool) -> "LogLevel":
        """Pick the level for the CLI flags. Quiet wins over debug and -v."""
        if quiet:
            return cls.QUIET
        if debug or verbosity >= 1:
            return cls.VERBOSE
        return cls.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    debug: bool = False,
) -> Console:
    """Attach a Rich handler to the package logger.

    Calling this again replaces the handler, so each CLI invocation starts
    from a clean setup.

    Args:
        verbosity: Number of -v flags
        quiet: Only log warnings and errors
        no_color: Disable colored output
        debug: Debug level with timestamps and source paths (also -vv)

    Returns:
        The stderr console, shared with status output
    """
    console = Console(
        stderr=True,
        force_terminal=False if no_color else None,
        no_color=no_color,
    )

    detailed = debug or verbosity >= 2
    handler = RichHandler(
        console=console,
        show_time=detailed,
        show_path=detailed,
        rich_tracebacks=detailed,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(LogLevel.from_flags(verbosity, quiet, debug))

    return console
