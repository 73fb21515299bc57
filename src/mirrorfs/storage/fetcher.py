"""Fetch capability: the only channel between the cache and a backing store."""

from abc import ABC, abstractmethod
from pathlib import PurePosixPath
from typing import List, Optional

from mirrorfs.items import Item


class MirrorError(Exception):
    """Base exception for mirrorfs errors."""

    pass


class FetchFailure(MirrorError):
    """Raised when a backing store operation fails.

    Covers I/O errors, permission problems and unavailable services. The
    original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        path: Optional[PurePosixPath] = None,
        operation: Optional[str] = None,
    ):
        super().__init__(message)
        self.path = path
        self.operation = operation


class PathNotFoundError(MirrorError):
    """Raised by fetchers when a path does not exist in the backing store."""

    pass


class ReadOnlyError(MirrorError):
    """Raised when a mutation is requested on a read-only cache."""

    pass


class Fetcher(ABC):
    """Abstract backing store.

    Implementations raise PathNotFoundError for missing paths and
    FetchFailure for every other failure. Paths are normalized mirror keys
    (absolute POSIX paths where ``/`` is the store root).
    """

    @abstractmethod
    def read_item(self, path: PurePosixPath) -> Item:
        """Classify ``path`` as a file or directory without reading contents."""

    @abstractmethod
    def read_children(self, path: PurePosixPath) -> List[Item]:
        """Return metadata for every immediate child of a directory."""

    @abstractmethod
    def read_contents(self, path: PurePosixPath) -> bytes:
        """Return the full contents of a file."""

    @abstractmethod
    def create_directory(self, path: PurePosixPath) -> None:
        """Create a directory in the backing store."""

    @abstractmethod
    def write_contents(self, path: PurePosixPath, data: bytes) -> None:
        """Write ``data`` to a file in the backing store."""

    @abstractmethod
    def remove(self, path: PurePosixPath) -> None:
        """Remove a file or directory from the backing store."""
