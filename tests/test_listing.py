"""Tests for directory enumeration and walking."""

from pathlib import PurePosixPath as P

import pytest

from mirrorfs import (
    Entry,
    FetchFailure,
    LocalFetcher,
    MemoryFetcher,
    MirrorCache,
    enumerate_directory,
    walk,
)


@pytest.fixture
def fetcher():
    """Create an in-memory tree."""
    return MemoryFetcher(
        files={
            "/proj/setup.cfg": b"[metadata]",
            "/proj/src/app.py": b"app",
            "/proj/src/lib/util.py": b"util",
        },
        directories=["/proj/docs"],
    )


@pytest.fixture
def cache(fetcher):
    """Create a cache over the tree."""
    return MirrorCache(fetcher)


class TestEnumerateDirectory:
    """Test loading a directory's children."""

    def test_enumerate_loads_children(self, cache, fetcher):
        """Test children are inserted and the directory is marked enumerated."""
        children = enumerate_directory(cache, "/proj")

        assert children == [
            Entry(P("/proj/docs"), False),
            Entry(P("/proj/setup.cfg"), True),
            Entry(P("/proj/src"), False),
        ]
        assert cache.item("/proj").children_enumerated is True
        assert cache.get_children("/proj") == children
        assert fetcher.call_count("read_item") == 1

    def test_enumerate_once(self, cache, fetcher):
        """Test read_children is called once per residency."""
        enumerate_directory(cache, "/proj")
        enumerate_directory(cache, "/proj")

        assert fetcher.call_count("read_children", "/proj") == 1

    def test_enumerate_again_after_forget(self, cache, fetcher):
        """Test forgetting a directory allows a fresh enumeration."""
        enumerate_directory(cache, "/proj")
        cache.forget("/proj")

        enumerate_directory(cache, "/proj")

        assert fetcher.call_count("read_children", "/proj") == 2

    def test_enumerate_keeps_loaded_contents(self, cache, fetcher):
        """Test resident children keep their memoized bytes."""
        cache.get("/proj")
        cache.get_contents("/proj/setup.cfg")

        enumerate_directory(cache, "/proj")
        cache.get_contents("/proj/setup.cfg")

        assert fetcher.call_count("read_contents", "/proj/setup.cfg") == 1

    def test_enumerate_changes_residency(self, cache):
        """Test new children stop being 'would be resident' once enumerated."""
        cache.get("/proj")
        assert cache.would_be_resident("/proj/new.txt") is True

        enumerate_directory(cache, "/proj")

        assert cache.would_be_resident("/proj/new.txt") is False
        assert cache.would_be_resident("/proj/src") is True

    def test_enumerate_missing(self, cache):
        """Test a missing directory yields None."""
        assert enumerate_directory(cache, "/nope") is None

    def test_enumerate_file(self, cache):
        """Test enumerating a file raises NotADirectoryError."""
        with pytest.raises(NotADirectoryError):
            enumerate_directory(cache, "/proj/setup.cfg")

    def test_enumerate_failure_leaves_flag(self, cache, fetcher):
        """Test a failed listing does not mark the directory enumerated."""
        cache.get("/proj")
        fetcher.fail_paths.add(P("/proj"))

        with pytest.raises(FetchFailure):
            enumerate_directory(cache, "/proj")

        assert cache.item("/proj").children_enumerated is False

    def test_enumerate_local_directory(self, tmp_path):
        """Test enumeration against a real directory."""
        (tmp_path / "a.txt").write_bytes(b"a")
        (tmp_path / "sub").mkdir()
        cache = MirrorCache(LocalFetcher(tmp_path))

        children = enumerate_directory(cache, "/")

        assert [c.path().name for c in children] == ["a.txt", "sub"]
        assert children[0].contents(cache) == b"a"


class TestWalk:
    """Test depth-first walking."""

    def test_walk_full_tree(self, cache):
        """Test walking yields every path in pre-order with depths."""
        result = [(depth, str(entry.path())) for depth, entry in walk(cache, "/proj")]

        assert result == [
            (0, "/proj"),
            (1, "/proj/docs"),
            (1, "/proj/setup.cfg"),
            (1, "/proj/src"),
            (2, "/proj/src/app.py"),
            (2, "/proj/src/lib"),
            (3, "/proj/src/lib/util.py"),
        ]

    def test_walk_max_depth(self, cache, fetcher):
        """Test directories below max_depth are not enumerated."""
        result = [str(entry.path()) for _, entry in walk(cache, "/proj", max_depth=1)]

        assert result == ["/proj", "/proj/docs", "/proj/setup.cfg", "/proj/src"]
        assert fetcher.call_count("read_children", "/proj/src") == 0

    def test_walk_file(self, cache):
        """Test walking a file yields just the file."""
        assert [e.path() for _, e in walk(cache, "/proj/setup.cfg")] == [
            P("/proj/setup.cfg")
        ]

    def test_walk_missing(self, cache):
        """Test walking a missing path yields nothing."""
        assert list(walk(cache, "/nope")) == []
