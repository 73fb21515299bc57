"""Fetchers for backing stores.

This module provides the abstract fetch capability together with local disk,
cloud object storage and in-memory implementations.
"""

from mirrorfs.storage.cloud import CloudFetcher
from mirrorfs.storage.fetcher import (
    FetchFailure,
    Fetcher,
    MirrorError,
    PathNotFoundError,
    ReadOnlyError,
)
from mirrorfs.storage.local import LocalFetcher
from mirrorfs.storage.memory import MemoryFetcher

__all__ = [
    "Fetcher",
    "LocalFetcher",
    "CloudFetcher",
    "MemoryFetcher",
    "MirrorError",
    "FetchFailure",
    "PathNotFoundError",
    "ReadOnlyError",
]
