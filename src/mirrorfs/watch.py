"""Applying out-of-band change notifications to a MirrorCache."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

from mirrorfs.cache.mirror import MirrorCache
from mirrorfs.utils import PathLike, normalize_path

logger = logging.getLogger(__name__)


class ChangeKind(Enum):
    CREATED = "created"
    MODIFIED = "modified"
    REMOVED = "removed"


@dataclass(frozen=True)
class ChangeEvent:
    """A raw change notification from a watcher.

    Attributes:
        path: Mirror path that changed
        kind: What happened to it
    """

    path: PathLike
    kind: Union[ChangeKind, str]

    def __post_init__(self):
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "kind", ChangeKind(self.kind))


def apply_change(cache: MirrorCache, event: ChangeEvent) -> bool:
    """Update the cache for one change notification.

    Events for paths that would not be resident are ignored. Otherwise the
    path and its descendants are dropped; created or modified paths are
    re-read so the cache reflects their current kind. Contents reload lazily.

    Args:
        cache: Cache to update
        event: Change notification

    Returns:
        True if the cache reacted to the event

    Raises:
        FetchFailure: If re-reading the path failed
    """
    if not cache.would_be_resident(event.path):
        logger.debug(f"Ignoring {event.kind.value} event for {event.path}")
        return False

    cache.forget(event.path)
    if event.kind is not ChangeKind.REMOVED:
        cache.get(event.path)
    logger.debug(f"Applied {event.kind.value} event for {event.path}")
    return True


def apply_changes(cache: MirrorCache, events: Iterable[ChangeEvent]) -> int:
    """Apply a batch of change notifications in order.

    Returns:
        Number of events the cache reacted to
    """
    return sum(1 for event in events if apply_change(cache, event))
