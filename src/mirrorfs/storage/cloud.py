"""Cloud object storage fetcher (via cloudfiles)."""

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List

from mirrorfs.items import DirectoryItem, FileItem, Item
from mirrorfs.storage.fetcher import FetchFailure, Fetcher, PathNotFoundError
from mirrorfs.utils import ROOT, relative_key

logger = logging.getLogger(__name__)


class CloudFetcher(Fetcher):
    """Mirrors a bucket prefix such as ``gs://bucket/project``.

    Object stores have no real directories: a path is a directory when at
    least one object key lives below it. The root is always a directory.

    Examples:
        >>> fetcher = CloudFetcher('gs://bucket/project')
        >>> fetcher.read_contents(PurePosixPath('/config.json'))
        b'{...}'
    """

    def __init__(self, url: str):
        self.url = url.rstrip("/")

    def __repr__(self) -> str:
        return f"CloudFetcher({self.url!r})"

    def _cloudfiles(self) -> Any:
        from cloudfiles import CloudFiles

        return CloudFiles(self.url)

    @staticmethod
    def _prefix(path: PurePosixPath) -> str:
        key = relative_key(path)
        return f"{key}/" if key else ""

    def _list_keys(self, cf: Any, path: PurePosixPath) -> List[str]:
        prefix = self._prefix(path)
        return [key for key in cf.list(prefix=prefix) if key.startswith(prefix)]

    def read_item(self, path: PurePosixPath) -> Item:
        if path == ROOT:
            return DirectoryItem(path)
        try:
            cf = self._cloudfiles()
            if cf.exists(relative_key(path)):
                return FileItem(path)
            if any(True for _ in self._list_keys(cf, path)):
                return DirectoryItem(path)
        except Exception as e:
            raise FetchFailure(f"read_item failed for {path}: {e}", path, "read_item") from e
        raise PathNotFoundError(f"{path} does not exist in {self.url}")

    def read_children(self, path: PurePosixPath) -> List[Item]:
        try:
            keys = self._list_keys(self._cloudfiles(), path)
        except Exception as e:
            raise FetchFailure(
                f"read_children failed for {path}: {e}", path, "read_children"
            ) from e

        if not keys and path != ROOT:
            raise PathNotFoundError(f"{path} does not exist in {self.url}")

        prefix = self._prefix(path)
        # name -> is_directory
        children: Dict[str, bool] = {}
        for key in keys:
            name, sep, _ = key[len(prefix) :].partition("/")
            if not name:
                continue
            children[name] = children.get(name, False) or bool(sep)

        return [
            DirectoryItem(path / name) if is_dir else FileItem(path / name)
            for name, is_dir in sorted(children.items())
        ]

    def read_contents(self, path: PurePosixPath) -> bytes:
        try:
            content = self._cloudfiles().get(relative_key(path))
        except Exception as e:
            raise FetchFailure(
                f"read_contents failed for {path}: {e}", path, "read_contents"
            ) from e
        if content is None:
            raise PathNotFoundError(f"{path} does not exist in {self.url}")
        return content

    def create_directory(self, path: PurePosixPath) -> None:
        # Prefixes are created implicitly when objects are written below them
        logger.debug(f"create_directory is a no-op for cloud path {path}")

    def write_contents(self, path: PurePosixPath, data: bytes) -> None:
        try:
            self._cloudfiles().put(relative_key(path), data)
        except Exception as e:
            raise FetchFailure(
                f"write_contents failed for {path}: {e}", path, "write_contents"
            ) from e

    def remove(self, path: PurePosixPath) -> None:
        try:
            cf = self._cloudfiles()
            key = relative_key(path)
            if key and cf.exists(key):
                cf.delete(key)
                return
            keys = self._list_keys(cf, path)
            if keys:
                cf.delete(keys)
                return
        except Exception as e:
            raise FetchFailure(f"remove failed for {path}: {e}", path, "remove") from e
        raise PathNotFoundError(f"{path} does not exist in {self.url}")
