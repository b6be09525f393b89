from .engine import SearchRequest, run_search
from .scanner import scan_file

__all__ = ['SearchRequest', 'run_search', 'scan_file']
