"""ggrep - concurrent regular expression search over files and directory trees."""

from .errors import SearchError
from .search.engine import SearchRequest, run_search

__all__ = ['SearchError', 'SearchRequest', 'run_search']

__version__ = '0.1.0'
