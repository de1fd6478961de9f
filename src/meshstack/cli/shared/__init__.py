"""Shared CLI utilities."""

from .console import CLIConsole, console, with_error_handling
from .logging_setup import setup_logging

__all__ = ["CLIConsole", "console", "setup_logging", "with_error_handling"]
