"""Error taxonomy for ggrep.

Every error a search task can hit is fatal to the whole search.  Tasks
raise one of the ``SearchError`` subclasses below; the supervisor records
the first one and the command line turns it into a single diagnostic
line and a non-zero exit status.
"""

from __future__ import annotations

from typing import Optional


class SearchError(Exception):
    """Base class for all fatal search errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class MissingArgument(SearchError):
    pass


class PathStatFailure(SearchError):
    pass


class DirectoryReadFailure(SearchError):
    pass


class FileOpenFailure(SearchError):
    pass


class FileReadFailure(SearchError):
    pass


class TaskStartFailure(SearchError):
    """Raised when the interpreter refuses to start another task thread."""
