"""Search driver for ggrep.

Builds the shared ``SearchRequest``, starts a traversal task on the root
path and blocks on the completion barrier until every task spawned from
it has finished.  The first fatal error raised by any task ends the wait
and is re-raised to the caller.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Optional, Pattern, Union

from ..discovery.engine import traverse
from ..supervisor.manager import TaskSupervisor
from .scanner import Emit, Matcher, echo_line, scan_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchRequest:
    """Parameters of one search, shared read-only by every task."""

    matcher: Matcher
    root_path: str
    recursive: bool = False
    include_hidden: bool = False
    encoding: str = 'utf-8'

    @classmethod
    def from_pattern(cls, pattern: Union[str, Pattern[str]], root_path: str, **kwargs) -> 'SearchRequest':
        """Compile ``pattern`` as a regular expression and normalise ``root_path``."""
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        return cls(matcher=compiled.search, root_path=os.path.normpath(root_path), **kwargs)


def run_search(request: SearchRequest, emit: Optional[Emit] = None,
               supervisor: Optional[TaskSupervisor] = None) -> None:
    """Run ``request`` to completion.

    Matching lines are passed to ``emit`` (default ``echo_line``) as soon
    as each file has been scanned.  No lines are emitted after the search
    has been aborted.

    Raises:
        SearchError: the first fatal error hit by any task.
    """
    supervisor = supervisor or TaskSupervisor()
    out: Callable[[str], None] = emit or echo_line

    def guarded_emit(line: str) -> None:
        if not supervisor.aborted:
            out(line)

    def scan(path: str) -> None:
        logger.debug('Scanning %s', path)
        scan_file(request.matcher, path, encoding=request.encoding, emit=guarded_emit)

    logger.debug('Starting search in %s (recursive=%s, hidden=%s)',
                 request.root_path, request.recursive, request.include_hidden)
    supervisor.spawn(traverse, request, request.root_path, supervisor.spawn, scan)
    supervisor.wait()
