"""Discovery engine for ggrep.

Walks the search path and routes every entry it finds: directories go
back into ``traverse`` (only when searching recursively) and files go to
the scanner.  Each routed entry becomes its own concurrently running
task; ``traverse`` never waits for the tasks it spawns.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, List

from ..errors import DirectoryReadFailure, PathStatFailure
from .hidden import is_hidden

if TYPE_CHECKING:
    from ..search.engine import SearchRequest

logger = logging.getLogger(__name__)

Spawn = Callable[..., None]
ScanTask = Callable[[str], None]


class EntryKind(Enum):
    FILE = auto()
    DIRECTORY = auto()


@dataclass(frozen=True)
class PathEntry:
    path: str
    kind: EntryKind

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


def list_entries(directory: str) -> List[PathEntry]:
    """Return the direct children of ``directory`` in name order.

    Entries are classified without following symlinks.  Symlinks pointing
    at directories are left out so recursive searches cannot loop.

    Raises:
        DirectoryReadFailure: if the directory cannot be enumerated.
    """
    entries: List[PathEntry] = []
    try:
        with os.scandir(directory) as it:
            children = sorted(it, key=lambda e: e.name)
        for child in children:
            child_path = os.path.join(directory, child.name)
            if child.is_dir(follow_symlinks=False):
                entries.append(PathEntry(child_path, EntryKind.DIRECTORY))
            elif child.is_symlink() and child.is_dir():
                logger.debug('Skipping symlinked directory %s', child_path)
            else:
                entries.append(PathEntry(child_path, EntryKind.FILE))
    except OSError as exc:
        raise DirectoryReadFailure(f'Could not read the directory {directory}: {exc}', path=directory) from exc
    return entries


def traverse(request: 'SearchRequest', path: str, spawn: Spawn, scan: ScanTask) -> None:
    """Inspect ``path`` and fan out traversal and scan tasks for it.

    Args:
        request: The search being run.
        path: File or directory to inspect.
        spawn: Starts ``fn(*args)`` as a new task registered with the
            completion barrier.
        scan: File scanning task, called with a file path.

    Raises:
        PathStatFailure: if ``path`` cannot be stat'ed.
        DirectoryReadFailure: if ``path`` is a directory that cannot be read.
    """
    try:
        st = os.stat(path)
    except OSError as exc:
        raise PathStatFailure(f'Failed to stat file with name {path}, error: {exc}', path=path) from exc

    if not stat.S_ISDIR(st.st_mode):
        if request.include_hidden or not is_hidden(path):
            spawn(scan, path)
        else:
            logger.debug('Skipping hidden file %s', path)
        return

    for entry in list_entries(path):
        if not request.include_hidden and is_hidden(entry.path):
            logger.debug('Skipping hidden entry %s', entry.path)
            continue
        if entry.is_dir:
            # Without recursion subdirectories are dropped silently.
            if request.recursive:
                spawn(traverse, request, entry.path, spawn, scan)
        else:
            spawn(scan, entry.path)
