"""Local disk fetcher."""

import errno
import os
import shutil
import stat
import tempfile
from pathlib import Path, PurePosixPath
from typing import List, Union

from mirrorfs.items import DirectoryItem, FileItem, Item
from mirrorfs.storage.fetcher import FetchFailure, Fetcher, PathNotFoundError
from mirrorfs.utils import relative_key


class LocalFetcher(Fetcher):
    """Reads and writes a directory tree on local disk.

    The mirror key ``/a/b`` maps to ``root/a/b``.

    Examples:
        >>> fetcher = LocalFetcher('/srv/project')
        >>> fetcher.read_item(PurePosixPath('/src'))
        DirectoryItem(path=PurePosixPath('/src'), children_enumerated=False)
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser()

    def __repr__(self) -> str:
        return f"LocalFetcher({str(self.root)!r})"

    def _local_path(self, path: PurePosixPath) -> Path:
        key = relative_key(path)
        return self.root / key if key else self.root

    @staticmethod
    def _failure(e: OSError, path: PurePosixPath, operation: str) -> Exception:
        if isinstance(e, FileNotFoundError):
            return PathNotFoundError(f"{path} does not exist")
        return FetchFailure(f"{operation} failed for {path}: {e}", path, operation)

    def read_item(self, path: PurePosixPath) -> Item:
        try:
            mode = self._local_path(path).stat().st_mode
        except OSError as e:
            raise self._failure(e, path, "read_item") from e

        if stat.S_ISDIR(mode):
            return DirectoryItem(path)
        return FileItem(path)

    def read_children(self, path: PurePosixPath) -> List[Item]:
        children: List[Item] = []
        try:
            with os.scandir(self._local_path(path)) as it:
                for dir_entry in it:
                    child = path / dir_entry.name
                    if dir_entry.is_dir():
                        children.append(DirectoryItem(child))
                    else:
                        children.append(FileItem(child))
        except OSError as e:
            raise self._failure(e, path, "read_children") from e
        return sorted(children, key=lambda item: str(item.path))

    def read_contents(self, path: PurePosixPath) -> bytes:
        try:
            with open(self._local_path(path), "rb") as f:
                return f.read()
        except OSError as e:
            raise self._failure(e, path, "read_contents") from e

    def create_directory(self, path: PurePosixPath) -> None:
        try:
            self._local_path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise self._failure(e, path, "create_directory") from e

    def write_contents(self, path: PurePosixPath, data: bytes) -> None:
        target = self._local_path(path)
        temp_path = None
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                temp_path = Path(tmp.name)
                tmp.write(data)
            temp_path.replace(target)
        except OSError as e:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()
            if e.errno == errno.ENOSPC:
                raise FetchFailure(
                    f"Disk full while writing {path}", path, "write_contents"
                ) from e
            raise self._failure(e, path, "write_contents") from e

    def remove(self, path: PurePosixPath) -> None:
        target = self._local_path(path)
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink()
        except OSError as e:
            raise self._failure(e, path, "remove") from e
