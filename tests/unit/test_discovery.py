"""
Unit tests for the discovery engine.

``traverse`` is driven with a recording ``spawn`` so the routing decisions
can be checked without starting any threads.
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from ggrep.discovery.engine import EntryKind, PathEntry, list_entries, traverse
from ggrep.discovery.hidden import HIDDEN_FILES_SUPPORTED
from ggrep.errors import DirectoryReadFailure, PathStatFailure
from ggrep.search.engine import SearchRequest


def _scan(path):  # placeholder scan task, never run by the recorder
    raise AssertionError("scan should not be called directly")


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, fn, *args):
        self.calls.append((fn, args))

    def scanned(self):
        return sorted(os.path.basename(args[0]) for fn, args in self.calls if fn is _scan)

    def traversed(self):
        return sorted(os.path.basename(args[1]) for fn, args in self.calls if fn is traverse)


class TestTraverse:

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)
        (self.root / "a.txt").write_text("hello world\n")
        (self.root / "b.txt").write_text("goodbye\n")
        (self.root / "sub").mkdir()
        (self.root / "sub" / "c.txt").write_text("hello again\n")
        (self.root / ".hidden.txt").write_text("hello hidden\n")
        (self.root / ".cache").mkdir()
        (self.root / ".cache" / "d.txt").write_text("hello cache\n")
        self.spawn = Recorder()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _request(self, **kwargs):
        return SearchRequest.from_pattern("hello", str(self.root), **kwargs)

    def _traverse(self, request, path=None):
        traverse(request, path or request.root_path, self.spawn, _scan)

    @pytest.mark.skipif(not HIDDEN_FILES_SUPPORTED, reason="hidden files not supported on this platform")
    def test_non_recursive_scans_direct_files_only(self):
        self._traverse(self._request())
        assert self.spawn.scanned() == ["a.txt", "b.txt"]
        assert self.spawn.traversed() == []

    @pytest.mark.skipif(not HIDDEN_FILES_SUPPORTED, reason="hidden files not supported on this platform")
    def test_recursive_spawns_traversal_for_subdirectories(self):
        self._traverse(self._request(recursive=True))
        assert self.spawn.scanned() == ["a.txt", "b.txt"]
        assert self.spawn.traversed() == ["sub"]

    def test_hidden_entries_included_on_request(self):
        self._traverse(self._request(recursive=True, include_hidden=True))
        assert self.spawn.scanned() == [".hidden.txt", "a.txt", "b.txt"]
        assert self.spawn.traversed() == [".cache", "sub"]

    def test_spawned_traversal_carries_request_and_callbacks(self):
        request = self._request(recursive=True)
        self._traverse(request)
        fn, args = next(c for c in self.spawn.calls if c[0] is traverse)
        assert args == (request, str(self.root / "sub"), self.spawn, _scan)

    def test_file_path_is_scanned_directly(self):
        path = str(self.root / "a.txt")
        self._traverse(self._request(), path)
        assert self.spawn.calls == [(_scan, (path,))]

    @pytest.mark.skipif(not HIDDEN_FILES_SUPPORTED, reason="hidden files not supported on this platform")
    def test_hidden_file_path_is_filtered(self):
        self._traverse(self._request(), str(self.root / ".hidden.txt"))
        assert self.spawn.calls == []
        self._traverse(self._request(include_hidden=True), str(self.root / ".hidden.txt"))
        assert self.spawn.scanned() == [".hidden.txt"]

    def test_missing_path_raises_stat_failure(self):
        missing = str(self.root / "nope")
        with pytest.raises(PathStatFailure) as excinfo:
            self._traverse(self._request(), missing)
        assert excinfo.value.path == missing
        assert self.spawn.calls == []

    def test_unreadable_directory_raises(self):
        with patch("ggrep.discovery.engine.os.scandir", side_effect=PermissionError("denied")):
            with pytest.raises(DirectoryReadFailure, match="denied"):
                self._traverse(self._request())


class TestListEntries:

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_entries_are_classified_and_sorted(self):
        (self.root / "z.txt").write_text("")
        (self.root / "m").mkdir()
        (self.root / "a.txt").write_text("")
        entries = list_entries(str(self.root))
        assert entries == [
            PathEntry(str(self.root / "a.txt"), EntryKind.FILE),
            PathEntry(str(self.root / "m"), EntryKind.DIRECTORY),
            PathEntry(str(self.root / "z.txt"), EntryKind.FILE),
        ]
        assert entries[1].is_dir

    @pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="symlinks required")
    def test_symlinked_directories_are_skipped(self):
        (self.root / "real").mkdir()
        (self.root / "file.txt").write_text("")
        os.symlink(self.root / "real", self.root / "loop")
        os.symlink(self.root / "file.txt", self.root / "link.txt")
        names = [os.path.basename(e.path) for e in list_entries(str(self.root))]
        assert names == ["file.txt", "link.txt", "real"]

    def test_missing_directory_raises(self):
        with pytest.raises(DirectoryReadFailure):
            list_entries(str(self.root / "missing"))
