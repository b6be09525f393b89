"""Logging helpers for ggrep.

Diagnostics and log records go to stderr through a rich console so they
never mix with matched lines on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def configure_logging(level: str = 'WARNING') -> logging.Logger:
    """Attach a stderr ``RichHandler`` to the ``ggrep`` logger.

    Calling this again replaces the previous handler instead of adding one.
    """
    log = logging.getLogger('ggrep')
    for handler in list(log.handlers):
        log.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    handler.setFormatter(logging.Formatter('%(message)s'))
    log.addHandler(handler)
    log.setLevel(level)
    log.propagate = False
    return log


def report_fatal(message: str) -> None:
    """Print a one-line diagnostic to stderr."""
    err_console.print(f'ggrep: {message}', style='bold red', markup=False, highlight=False, soft_wrap=True)
