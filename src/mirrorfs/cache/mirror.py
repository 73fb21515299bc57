"""Lazily populated in-memory mirror of a backing store."""

import logging
from pathlib import PurePosixPath
from typing import Iterator, List, Optional

from mirrorfs.items import DirectoryItem, Entry, FileItem, Item
from mirrorfs.path_map import PathMap
from mirrorfs.storage.fetcher import (
    FetchFailure,
    Fetcher,
    PathNotFoundError,
    ReadOnlyError,
)
from mirrorfs.utils import PathLike, normalize_path, parent_path

logger = logging.getLogger(__name__)


class MirrorCache:
    """In-memory mirror of a hierarchical backing store.

    Items are fetched on first reference to a path and file contents are
    read at most once per residency (the span between an item's insertion and
    its removal). The cache is not thread-safe; callers sharing one instance
    across threads must serialize access themselves.

    Examples:
        >>> cache = MirrorCache(LocalFetcher('/srv/project'))
        >>> entry = cache.get('README.md')
        >>> entry.contents(cache)
        b'# Project'
    """

    def __init__(self, fetcher: Fetcher, read_only: bool = False):
        """Initialize the cache.

        Args:
            fetcher: Backing store access
            read_only: If True, pass-through mutations raise ReadOnlyError
        """
        self.fetcher = fetcher
        self.read_only = read_only
        self._items: PathMap[Item] = PathMap()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, path: PathLike) -> bool:
        return self.contains(path)

    def __iter__(self) -> Iterator[PurePosixPath]:
        return iter(list(self._items))

    def contains(self, path: PathLike) -> bool:
        """Check if a path is resident, without fetching."""
        return normalize_path(path) in self._items

    def item(self, path: PathLike) -> Optional[Item]:
        """Return the resident item at a path, without fetching."""
        return self._items.get(normalize_path(path))

    def _read_if_not_exists(self, path: PurePosixPath) -> Optional[Item]:
        item = self._items.get(path)
        if item is not None:
            return item

        try:
            item = self.fetcher.read_item(path)
        except PathNotFoundError:
            logger.debug(f"Miss-fill for {path}: not found in backing store")
            return None
        except FetchFailure as e:
            logger.warning(f"Miss-fill for {path} failed: {e}")
            raise

        logger.debug(f"Miss-fill for {path}: {type(item).__name__}")
        self._items.insert(path, item)
        return item

    def get(self, path: PathLike) -> Optional[Entry]:
        """Resolve a path to an Entry, fetching its metadata on a miss.

        Args:
            path: Mirror path

        Returns:
            Entry for the path, or None if it does not exist

        Raises:
            FetchFailure: If the backing store could not be read
        """
        item = self._read_if_not_exists(normalize_path(path))
        if item is None:
            return None
        return Entry.from_item(item)

    def get_contents(self, path: PathLike) -> Optional[bytes]:
        """Return a file's contents, loading them once if needed.

        Args:
            path: Mirror path

        Returns:
            File bytes, or None for directories and missing paths

        Raises:
            FetchFailure: If the backing store could not be read
        """
        key = normalize_path(path)
        item = self._read_if_not_exists(key)
        if not isinstance(item, FileItem):
            return None

        if item.contents is None:
            try:
                contents = self.fetcher.read_contents(key)
            except PathNotFoundError:
                logger.debug(f"Contents of {key} vanished from backing store")
                return None
            except FetchFailure as e:
                logger.warning(f"Reading contents of {key} failed: {e}")
                raise
            item.contents = contents
            logger.debug(f"Loaded {len(contents)} bytes for {key}")

        return item.contents

    def get_children(self, path: PathLike) -> Optional[List[Entry]]:
        """List the resident children of a path.

        Only items already in the cache are returned; this never fetches. Use
        ``mirrorfs.cache.enumerate_directory`` to load a directory's children.

        Args:
            path: Mirror path

        Returns:
            Entries sorted by path, or None if the path is not resident
        """
        child_paths = self._items.children(normalize_path(path))
        if child_paths is None:
            return None
        return [Entry.from_item(self._items.get(child)) for child in child_paths]

    def would_be_resident(self, path: PathLike) -> bool:
        """Tell whether a change at ``path`` concerns the cache.

        True if the path is resident, or if its parent is a resident directory
        whose children have not been enumerated yet.
        """
        key = normalize_path(path)
        if key in self._items:
            return True

        parent = parent_path(key)
        if parent is not None:
            parent_item = self._items.get(parent)
            if isinstance(parent_item, DirectoryItem):
                return not parent_item.children_enumerated

        return False

    def insert(self, item: Item) -> bool:
        """Insert an item fetched elsewhere.

        Resident items are never overwritten; remove them with ``forget``
        first.

        Returns:
            True if the item was inserted
        """
        if item.path in self._items:
            return False
        self._items.insert(item.path, item)
        return True

    def mark_enumerated(self, path: PathLike, enumerated: bool = True) -> None:
        """Set the ``children_enumerated`` flag of a resident directory.

        Raises:
            KeyError: If the path is not resident
            TypeError: If the path is a file
        """
        key = normalize_path(path)
        item = self._items.get(key)
        if item is None:
            raise KeyError(f"{key} is not resident")
        if not isinstance(item, DirectoryItem):
            raise TypeError(f"{key} is not a directory")
        item.children_enumerated = enumerated

    def forget(self, path: PathLike) -> int:
        """Drop a path and everything below it from the cache.

        Returns:
            Number of items removed
        """
        removed = self._items.remove(normalize_path(path))
        if removed:
            logger.debug(f"Invalidated {len(removed)} item(s) under {removed[0][0]}")
        return len(removed)

    def clear(self) -> None:
        """Drop every resident item."""
        self._items.clear()

    def _check_writable(self, path: PurePosixPath) -> None:
        if self.read_only:
            raise ReadOnlyError(f"Cannot modify {path}: cache is read-only")

    def _refresh(self, path: PurePosixPath) -> None:
        self.forget(path)
        # Writes may create intermediate directories; find the topmost one
        # below the nearest resident ancestor.
        top = path
        parent = parent_path(top)
        while parent is not None and parent not in self._items:
            top, parent = parent, parent_path(parent)

        parent_item = self._items.get(parent) if parent is not None else None
        # An enumerated directory must keep listing every child it has.
        if isinstance(parent_item, DirectoryItem) and parent_item.children_enumerated:
            self._read_if_not_exists(top)

    def create_directory(self, path: PathLike) -> None:
        """Create a directory in the backing store.

        Cloud prefixes only exist once an object is written below them, so on
        a ``CloudFetcher`` this leaves nothing new in the cache or the store.
        """
        key = normalize_path(path)
        self._check_writable(key)
        self.fetcher.create_directory(key)
        self._refresh(key)

    def write_contents(self, path: PathLike, data: bytes) -> None:
        """Write a file in the backing store; the next read re-fetches it."""
        key = normalize_path(path)
        self._check_writable(key)
        self.fetcher.write_contents(key, data)
        self._refresh(key)

    def remove(self, path: PathLike) -> None:
        """Remove a path from the backing store and from the cache."""
        key = normalize_path(path)
        self._check_writable(key)
        self.fetcher.remove(key)
        self.forget(key)
