"""File scanner for ggrep.

Reads one file line by line, keeps the lines accepted by the matcher and
emits them once the whole file has been read.  Lines from one file come
out in file order; nothing coordinates emission between files.
"""

from __future__ import annotations

from typing import Callable, List, Optional

import click

from ..errors import FileOpenFailure, FileReadFailure

Matcher = Callable[[str], object]
Emit = Callable[[str], None]


def echo_line(text: str) -> None:
    """Write one line to stdout unchanged, escape sequences included."""
    click.echo(text, color=True)


def scan_file(matcher: Matcher, path: str, encoding: str = 'utf-8', emit: Optional[Emit] = None) -> List[str]:
    """Search ``path`` and emit every matching line.

    Args:
        matcher: Predicate applied to each line.  Lines end at a newline; the
            newline and one trailing carriage return are removed.
        path: File to read.
        encoding: Text encoding; decoding errors are not tolerated.
        emit: Called once per matching line.  Defaults to ``echo_line``.

    Returns:
        The matching lines in file order.

    Raises:
        FileOpenFailure: if the file cannot be opened.
        FileReadFailure: if reading or decoding fails part way through.
    """
    if emit is None:
        emit = echo_line
    try:
        f = open(path, 'r', encoding=encoding, errors='strict', newline='\n')
    except OSError as exc:
        raise FileOpenFailure(f'Could not open file {path}: {exc}', path=path) from exc

    matches: List[str] = []
    with f:
        try:
            for line in f:
                text = line[:-1] if line.endswith('\n') else line
                if text.endswith('\r'):
                    text = text[:-1]
                if matcher(text):
                    matches.append(text)
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadFailure(f'Could not read file {path}: {exc}', path=path) from exc

    for text in matches:
        emit(text)
    return matches
