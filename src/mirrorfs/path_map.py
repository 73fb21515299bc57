"""Hierarchical keyed storage for mirrored items."""

from pathlib import PurePosixPath
from typing import Dict, Generic, Iterator, List, Optional, Set, Tuple, TypeVar

from mirrorfs.utils import parent_path

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("value", "children")

    def __init__(self, value: T, children: Optional[Set[PurePosixPath]] = None):
        self.value = value
        self.children: Set[PurePosixPath] = children or set()


class PathMap(Generic[T]):
    """Mapping from path to value that also tracks parent/child links.

    Children only appear under a parent when they were explicitly inserted.
    A path inserted before its parent is held as an orphan and adopted once
    the parent is inserted. Removing an ancestor also removes its orphans.
    """

    def __init__(self) -> None:
        self._nodes: Dict[PurePosixPath, _Node[T]] = {}
        self._orphans: Set[PurePosixPath] = set()

    def __contains__(self, path: PurePosixPath) -> bool:
        return path in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[PurePosixPath]:
        return iter(self._nodes)

    def get(self, path: PurePosixPath) -> Optional[T]:
        node = self._nodes.get(path)
        return node.value if node is not None else None

    def insert(self, path: PurePosixPath, value: T) -> None:
        """Insert or replace the value stored at ``path``."""
        existing = self._nodes.get(path)
        if existing is not None:
            existing.value = value
            return

        parent = parent_path(path)
        if parent is not None:
            parent_node = self._nodes.get(parent)
            if parent_node is not None:
                parent_node.children.add(path)
            else:
                self._orphans.add(path)

        adopted = {orphan for orphan in self._orphans if orphan.parent == path}
        self._orphans -= adopted
        self._nodes[path] = _Node(value, adopted)

    def remove(self, path: PurePosixPath) -> List[Tuple[PurePosixPath, T]]:
        """Remove ``path`` and everything below it.

        Returns:
            Removed (path, value) pairs, the requested path first
        """
        root = self._nodes.get(path)
        if root is None:
            return []

        parent = parent_path(path)
        parent_node = self._nodes.get(parent) if parent is not None else None
        if parent_node is not None:
            parent_node.children.discard(path)
        else:
            self._orphans.discard(path)

        # Orphans below ``path`` are not linked to it, so sweep them separately.
        below = {orphan for orphan in self._orphans if path in orphan.parents}
        self._orphans -= below

        removed: List[Tuple[PurePosixPath, T]] = []
        stack = [*sorted(below, key=str), path]
        while stack:
            current = stack.pop()
            node = self._nodes.pop(current)
            removed.append((current, node.value))
            stack.extend(node.children)
        return removed

    def children(self, path: PurePosixPath) -> Optional[List[PurePosixPath]]:
        """List inserted children of ``path`` in path order.

        Returns:
            Child paths, or None if ``path`` itself is not stored
        """
        node = self._nodes.get(path)
        if node is None:
            return None
        return sorted(node.children, key=str)

    def clear(self) -> None:
        self._nodes.clear()
        self._orphans.clear()
