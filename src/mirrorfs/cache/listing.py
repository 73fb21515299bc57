"""Directory enumeration on top of a MirrorCache.

The cache itself never lists directories. This module is the step that asks
the fetcher for a directory's children, inserts them and marks the directory
as enumerated.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from mirrorfs.cache.mirror import MirrorCache
from mirrorfs.items import DirectoryItem, Entry
from mirrorfs.utils import PathLike, normalize_path

logger = logging.getLogger(__name__)


def enumerate_directory(cache: MirrorCache, path: PathLike) -> Optional[List[Entry]]:
    """Load every immediate child of a directory into the cache.

    ``read_children`` is called at most once per residency of the directory.
    Children that are already resident keep their loaded contents.

    Args:
        cache: Cache to populate
        path: Directory path

    Returns:
        Child entries, or None if the path does not exist

    Raises:
        NotADirectoryError: If the path is a file
        FetchFailure: If the backing store could not be read
    """
    key = normalize_path(path)
    entry = cache.get(key)
    if entry is None:
        return None
    if entry.is_file():
        raise NotADirectoryError(f"{key} is not a directory")

    item = cache.item(key)
    if isinstance(item, DirectoryItem) and not item.children_enumerated:
        children = cache.fetcher.read_children(key)
        inserted = sum(1 for child in children if cache.insert(child))
        cache.mark_enumerated(key)
        logger.debug(
            f"Enumerated {key}: {len(children)} children, {inserted} newly resident"
        )

    return cache.get_children(key)


def walk(
    cache: MirrorCache, path: PathLike, max_depth: Optional[int] = None
) -> Iterator[Tuple[int, Entry]]:
    """Walk a subtree depth-first, enumerating directories on the way.

    Args:
        cache: Cache to read through
        path: Starting path (yielded at depth 0)
        max_depth: Deepest level to yield; None means unlimited

    Yields:
        (depth, entry) pairs in pre-order
    """
    root = cache.get(path)
    if root is None:
        return

    stack: List[Tuple[int, Entry]] = [(0, root)]
    while stack:
        depth, entry = stack.pop()
        yield depth, entry
        if entry.is_file() or (max_depth is not None and depth >= max_depth):
            continue
        children = enumerate_directory(cache, entry.path()) or []
        stack.extend((depth + 1, child) for child in reversed(children))
