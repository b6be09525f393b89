"""Command-line interface for ggrep.

``ggrep [-r] [-hidden] PATTERN PATH`` prints every line matching the
regular expression PATTERN in the file PATH, or in the files of the
directory PATH.  Matched lines go to stdout in no particular order across
files; any error ends the run with one diagnostic line on stderr.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from pathlib import Path
from typing import Optional

import click

from ..config_loader import ConfigurationError, load_config
from ..errors import MissingArgument, SearchError
from ..logging.logger import configure_logging, report_fatal
from ..search.engine import SearchRequest, run_search

logger = logging.getLogger(__name__)


@click.command(context_settings={'help_option_names': ['--help']})
@click.option('-r', '--recursive', is_flag=True, help='Search recursively through all directories in the target path.')
@click.option('-hidden', '--hidden', 'include_hidden', is_flag=True,
              help='Also search hidden files and directories. Not supported on Windows.')
@click.option('-v', '--verbose', is_flag=True, help='Log traversal decisions to stderr.')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), envvar='GGREP_CONFIG',
              default=None, help='Path to a YAML configuration file.')
@click.argument('pattern', required=False)
@click.argument('path', required=False)
@click.pass_context
def cli(ctx: click.Context, recursive: bool, include_hidden: bool, verbose: bool,
        config_path: Optional[str], pattern: Optional[str], path: Optional[str]) -> None:
    """Print lines matching PATTERN in the files under PATH."""
    try:
        cfg = load_config(Path(config_path) if config_path else None)
    except ConfigurationError as exc:
        report_fatal(str(exc))
        ctx.exit(1)
    configure_logging('DEBUG' if verbose else cfg['log_level'])

    try:
        if pattern is None:
            raise MissingArgument('No search expression specified')
        if path is None:
            raise MissingArgument('No search path specified')
        try:
            compiled = re.compile(pattern)
        except re.error as exc:
            raise click.BadParameter(f'invalid regular expression: {exc}', param_hint="'PATTERN'") from exc
        request = SearchRequest.from_pattern(
            compiled,
            path,
            recursive=recursive or cfg['recursive'],
            include_hidden=include_hidden or cfg['hidden'],
            encoding=cfg['encoding'],
        )
        run_search(request)
    except SearchError as exc:
        logger.debug('Search aborted', exc_info=exc)
        report_fatal(str(exc))
        ctx.exit(1)


def main() -> None:
    """Console script entry point.

    A failed search leaves its remaining task threads running, so a
    non-zero exit flushes the standard streams and leaves with ``os._exit``
    instead of going through interpreter shutdown while those threads may
    still hold the stdout lock.
    """
    try:
        cli(prog_name='ggrep')
    except SystemExit as exc:
        if exc.code:
            for stream in (sys.stdout, sys.stderr):
                try:
                    stream.flush()
                except (OSError, ValueError):
                    pass
            os._exit(exc.code if isinstance(exc.code, int) else 1)
        raise


if __name__ == '__main__':  # pragma: no cover
    main()
