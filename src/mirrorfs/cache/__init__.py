"""Lazily populated in-memory mirror of a backing store.

Key components:
- MirrorCache: miss-fill lookups, memoized contents, residency checks
- enumerate_directory: loads a directory's children into the cache
- walk: depth-first traversal built on enumerate_directory
"""

from mirrorfs.cache.listing import enumerate_directory, walk
from mirrorfs.cache.mirror import MirrorCache

__all__ = [
    "MirrorCache",
    "enumerate_directory",
    "walk",
]
