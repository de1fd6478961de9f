"""Diagnostic logging setup for the CLI."""

import sys

from loguru import logger

LOG_FORMAT = "{level: <8} | {name} - {message}"


def _stderr_sink(message: str) -> None:
    # Resolved per record so redirected or replaced stderr streams are honoured
    sys.stderr.write(message)


def setup_logging(verbose: bool = False) -> None:
    """Route loguru to stderr at WARNING, or DEBUG when verbose."""
    logger.remove()
    logger.add(
        _stderr_sink,
        level="DEBUG" if verbose else "WARNING",
        format=LOG_FORMAT,
    )
