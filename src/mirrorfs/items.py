"""Cached item model and the Entry handle returned to callers."""

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, List, Optional, Union

if TYPE_CHECKING:
    from mirrorfs.cache.mirror import MirrorCache


@dataclass
class FileItem:
    """A cached file.

    Attributes:
        path: Mirror key the item was loaded at
        contents: File bytes, None until the first content read
    """

    path: PurePosixPath
    contents: Optional[bytes] = None

    @property
    def is_file(self) -> bool:
        return True


@dataclass
class DirectoryItem:
    """A cached directory.

    Attributes:
        path: Mirror key the item was loaded at
        children_enumerated: True once every immediate child has been
            inserted into the store
    """

    path: PurePosixPath
    children_enumerated: bool = False

    @property
    def is_file(self) -> bool:
        return False


Item = Union[FileItem, DirectoryItem]


class Entry:
    """Detached handle to a mirrored path.

    An Entry holds only the path and its kind. Reading contents or children
    goes back through the cache by path, so two calls may observe different
    cache state.

    Examples:
        >>> entry = cache.get('/docs/readme.md')
        >>> entry.is_file()
        True
        >>> entry.contents(cache)
        b'# Hello'
    """

    __slots__ = ("_path", "_is_file")

    def __init__(self, path: PurePosixPath, is_file: bool):
        self._path = path
        self._is_file = is_file

    @classmethod
    def from_item(cls, item: Item) -> "Entry":
        return cls(item.path, item.is_file)

    def path(self) -> PurePosixPath:
        return self._path

    def is_file(self) -> bool:
        return self._is_file

    def is_directory(self) -> bool:
        return not self._is_file

    def contents(self, cache: "MirrorCache") -> Optional[bytes]:
        """Read this entry's contents through ``cache``."""
        return cache.get_contents(self._path)

    def children(self, cache: "MirrorCache") -> Optional[List["Entry"]]:
        """List this entry's resident children through ``cache``."""
        return cache.get_children(self._path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entry):
            return NotImplemented
        return self._path == other._path and self._is_file == other._is_file

    def __hash__(self) -> int:
        return hash((self._path, self._is_file))

    def __repr__(self) -> str:
        kind = "file" if self._is_file else "directory"
        return f"Entry({str(self._path)!r}, {kind})"
