"""Logging configuration for the cubetimer CLI."""

import logging
from enum import IntEnum
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "cubetimer"


class LogLevel(IntEnum):
    """Log level enumeration."""

    QUIET = logging.WARNING
    NORMAL = logging.INFO
    VERBOSE = logging.DEBUG


def resolve_level(verbosity: int = 0, quiet: bool = False) -> LogLevel:
    """Map CLI flags to a log level. ``quiet`` wins over any ``-v``."""
    if quiet:
        return LogLevel.QUIET
    if verbosity >= 1:
        return LogLevel.VERBOSE
    return LogLevel.NORMAL


def configure_logging(
    verbosity: int = 0,
    quiet: bool = False,
    no_color: bool = False,
    stream: TextIO | None = None,
) -> Console:
    """Configure logging based on CLI options.

    Only the ``cubetimer`` logger hierarchy is raised to DEBUG with ``-v``;
    third-party loggers stay at WARNING. ``-vv`` additionally shows
    timestamps and source paths.

    Args:
        verbosity: Number of -v flags (0=normal, 1=debug, 2+=debug with paths)
        quiet: Suppress non-error output (takes precedence over verbosity)
        no_color: Disable colored output
        stream: Output stream for logs (stderr when None)

    Returns:
        Configured Rich console for output
    """
    level = resolve_level(verbosity, quiet)

    console = Console(
        file=stream,
        stderr=stream is None,
        force_terminal=not no_color,
        no_color=no_color,
    )

    handler = RichHandler(
        console=console,
        show_time=verbosity >= 2,
        show_path=verbosity >= 2,
        markup=False,
    )

    logging.basicConfig(
        level=logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)

    return console
