"""Utility functions for mirrorfs paths."""

from pathlib import PurePath, PurePosixPath
from typing import Optional, Union

PathLike = Union[str, PurePath]

ROOT = PurePosixPath("/")

CLOUD_PREFIXES = (
    "s3://",
    "gs://",
    "gcs://",
    "az://",
    "azure://",
    "https://",
    "http://",
    "file://",
)


def is_cloud_path(path: PathLike) -> bool:
    """Check if a path is a cloud storage URL.

    Args:
        path: Path to check

    Returns:
        True if path starts with a cloud storage protocol

    Examples:
        >>> is_cloud_path('s3://bucket/prefix')
        True
        >>> is_cloud_path('/local/path')
        False
    """
    return str(path).startswith(CLOUD_PREFIXES)


def normalize_path(path: PathLike) -> PurePosixPath:
    """Convert a caller-supplied path into a mirror key.

    Mirror keys are absolute POSIX paths rooted at ``/``, which stands for the
    root of the backing store. Relative paths are anchored at the root. No
    symlink or case folding is applied; ``.`` components are dropped by
    ``PurePosixPath`` and ``..`` is rejected.

    Args:
        path: Path string or PurePath

    Returns:
        Normalized key

    Raises:
        ValueError: If the path contains a ``..`` component

    Examples:
        >>> normalize_path('a/b')
        PurePosixPath('/a/b')
        >>> normalize_path('/a/./b/')
        PurePosixPath('/a/b')
    """
    if isinstance(path, PurePath):
        path = path.as_posix()
    key = PurePosixPath(path)
    if ".." in key.parts:
        raise ValueError(f"Parent references are not allowed in mirror paths: {path}")
    if not key.is_absolute():
        key = ROOT / key
    return key


def parent_path(path: PurePosixPath) -> Optional[PurePosixPath]:
    """Return the parent key of a path, or None for the root."""
    parent = path.parent
    if parent == path:
        return None
    return parent


def relative_key(path: PurePosixPath) -> str:
    """Return a key relative to the root ('' for the root itself).

    Examples:
        >>> relative_key(PurePosixPath('/a/b'))
        'a/b'
    """
    return path.relative_to(ROOT).as_posix() if path != ROOT else ""
