"""mirrorfs: lazily populated in-memory mirror of local and cloud file trees."""

__version__ = "0.1.0"

from mirrorfs.cache import MirrorCache, enumerate_directory, walk
from mirrorfs.config import MirrorConfig, build_cache, build_fetcher
from mirrorfs.items import DirectoryItem, Entry, FileItem, Item
from mirrorfs.storage import (
    CloudFetcher,
    FetchFailure,
    Fetcher,
    LocalFetcher,
    MemoryFetcher,
    MirrorError,
    PathNotFoundError,
    ReadOnlyError,
)
from mirrorfs.watch import ChangeEvent, ChangeKind, apply_change, apply_changes

__all__ = [
    "MirrorCache",
    "MirrorConfig",
    "Entry",
    "Item",
    "FileItem",
    "DirectoryItem",
    "Fetcher",
    "LocalFetcher",
    "CloudFetcher",
    "MemoryFetcher",
    "MirrorError",
    "FetchFailure",
    "PathNotFoundError",
    "ReadOnlyError",
    "ChangeEvent",
    "ChangeKind",
    "apply_change",
    "apply_changes",
    "enumerate_directory",
    "walk",
    "build_cache",
    "build_fetcher",
    "__version__",
]
