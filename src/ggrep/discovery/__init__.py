from .engine import EntryKind, PathEntry, list_entries, traverse
from .hidden import HIDDEN_FILES_SUPPORTED, is_hidden

__all__ = ['EntryKind', 'PathEntry', 'list_entries', 'traverse', 'HIDDEN_FILES_SUPPORTED', 'is_hidden']
