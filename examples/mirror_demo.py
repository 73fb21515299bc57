"""Demonstration of lazy mirroring.

This script shows how a MirrorCache behaves over a local directory:
1. Lookups fetch metadata on first access only
2. File contents are read once and then served from memory
3. Directory listings only show what has been loaded
4. Change events are filtered through the residency check
"""

import tempfile
from pathlib import Path

from mirrorfs import (
    ChangeEvent,
    LocalFetcher,
    MirrorCache,
    apply_change,
    enumerate_directory,
    walk,
)


def demo_mirror(root: Path):
    """Walk through the main cache operations."""

    print("=" * 70)
    print("LAZY MIRROR DEMONSTRATION")
    print("=" * 70)

    cache = MirrorCache(LocalFetcher(root))

    # 1. Miss-fill
    print("\n1. Lookups")
    print("-" * 70)
    entry = cache.get("notes/todo.txt")
    print(f"Entry: {entry}")
    print(f"Resident items: {len(cache)}")

    # 2. Memoized contents
    print("\n2. Contents")
    print("-" * 70)
    print(f"First read: {entry.contents(cache)!r}")
    (root / "notes" / "todo.txt").write_text("changed on disk")
    print(f"Second read (memoized): {entry.contents(cache)!r}")

    # 3. Listings
    print("\n3. Listings")
    print("-" * 70)
    cache.get("notes")
    print(f"Before enumeration: {cache.get_children('notes')}")
    print(f"After enumeration: {enumerate_directory(cache, 'notes')}")

    # 4. Change events
    print("\n4. Change events")
    print("-" * 70)
    reacted = apply_change(cache, ChangeEvent("notes/todo.txt", "modified"))
    print(f"Reacted to todo.txt change: {reacted}")
    print(f"Fresh read: {cache.get_contents('notes/todo.txt')!r}")
    reacted = apply_change(cache, ChangeEvent("elsewhere/file", "created"))
    print(f"Reacted to unrelated change: {reacted}")

    print("\nFull tree:")
    for depth, item in walk(cache, "/"):
        print(f"{'  ' * depth}{item.path().name or '/'}")


if __name__ == "__main__":
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "notes").mkdir()
        (root / "notes" / "todo.txt").write_text("buy milk")
        (root / "notes" / "ideas.md").write_text("# Ideas")
        (root / "readme.txt").write_text("demo")
        demo_mirror(root)
