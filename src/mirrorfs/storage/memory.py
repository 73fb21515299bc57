"""In-memory fetcher for tests and fixtures."""

from collections import Counter
from pathlib import PurePosixPath
from typing import Dict, Iterable, List, Optional, Set

from mirrorfs.items import DirectoryItem, FileItem, Item
from mirrorfs.storage.fetcher import FetchFailure, Fetcher, PathNotFoundError
from mirrorfs.utils import ROOT, PathLike, normalize_path, parent_path


class MemoryFetcher(Fetcher):
    """Dict-backed store that records every call it receives.

    Parent directories of seeded files are created implicitly. Paths listed
    in ``fail_paths`` make every operation on them raise FetchFailure.

    Examples:
        >>> fetcher = MemoryFetcher(files={'/a/b.txt': b'hi'})
        >>> fetcher.read_item(PurePosixPath('/a'))
        DirectoryItem(path=PurePosixPath('/a'), children_enumerated=False)
        >>> fetcher.call_count('read_item')
        1
    """

    def __init__(
        self,
        files: Optional[Dict[PathLike, bytes]] = None,
        directories: Optional[Iterable[PathLike]] = None,
    ):
        self.files: Dict[PurePosixPath, bytes] = {}
        self.directories: Set[PurePosixPath] = {ROOT}
        self.fail_paths: Set[PurePosixPath] = set()
        self.calls: Counter = Counter()

        for directory in directories or ():
            self._add_directory(normalize_path(directory))
        for path, data in (files or {}).items():
            key = normalize_path(path)
            self._add_directory(key.parent)
            self.files[key] = data

    def _add_directory(self, path: PurePosixPath) -> None:
        self.directories.add(path)
        self.directories.update(path.parents)

    def _record(self, operation: str, path: PurePosixPath) -> None:
        self.calls[(operation, path)] += 1
        if path in self.fail_paths:
            raise FetchFailure(f"{operation} failed for {path}", path, operation)

    def call_count(self, operation: str, path: Optional[PathLike] = None) -> int:
        """Number of recorded calls for an operation, optionally for one path."""
        if path is not None:
            return self.calls[(operation, normalize_path(path))]
        return sum(n for (op, _), n in self.calls.items() if op == operation)

    def read_item(self, path: PurePosixPath) -> Item:
        self._record("read_item", path)
        if path in self.files:
            return FileItem(path)
        if path in self.directories:
            return DirectoryItem(path)
        raise PathNotFoundError(f"{path} does not exist")

    def read_children(self, path: PurePosixPath) -> List[Item]:
        self._record("read_children", path)
        if path in self.files:
            raise FetchFailure(f"{path} is not a directory", path, "read_children")
        if path not in self.directories:
            raise PathNotFoundError(f"{path} does not exist")
        children: List[Item] = [
            DirectoryItem(d) for d in self.directories if parent_path(d) == path
        ]
        children.extend(FileItem(f) for f in self.files if f.parent == path)
        return sorted(children, key=lambda item: str(item.path))

    def read_contents(self, path: PurePosixPath) -> bytes:
        self._record("read_contents", path)
        if path in self.directories:
            raise FetchFailure(f"{path} is a directory", path, "read_contents")
        try:
            return self.files[path]
        except KeyError:
            raise PathNotFoundError(f"{path} does not exist") from None

    def create_directory(self, path: PurePosixPath) -> None:
        self._record("create_directory", path)
        if path in self.files:
            raise FetchFailure(f"{path} is a file", path, "create_directory")
        self._add_directory(path)

    def write_contents(self, path: PurePosixPath, data: bytes) -> None:
        self._record("write_contents", path)
        if path in self.directories:
            raise FetchFailure(f"{path} is a directory", path, "write_contents")
        self._add_directory(path.parent)
        self.files[path] = bytes(data)

    def remove(self, path: PurePosixPath) -> None:
        self._record("remove", path)
        if path in self.files:
            del self.files[path]
            return
        if path == ROOT:
            raise FetchFailure("Cannot remove the store root", path, "remove")
        if path not in self.directories:
            raise PathNotFoundError(f"{path} does not exist")
        self.directories = {
            d for d in self.directories if d != path and path not in d.parents
        }
        self.files = {
            f: data for f, data in self.files.items() if path not in f.parents
        }
