"""Mirror configuration management."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mirrorfs.cache.mirror import MirrorCache
from mirrorfs.storage import CloudFetcher, Fetcher, LocalFetcher
from mirrorfs.utils import is_cloud_path

DEFAULT_CONFIG_PATH = Path.home() / ".mirrorfs" / "config.json"


@dataclass
class MirrorConfig:
    """Configuration for a mirror session.

    Attributes:
        root: Local directory or cloud URL (e.g. 'gs://bucket/prefix') to mirror
        read_only: If True, create/write/remove requests are rejected
        log_level: Logging level name used by the CLI
    """

    root: str = "."
    read_only: bool = False
    log_level: str = "WARNING"

    def __post_init__(self):
        """Keep root as a string and normalize the log level name."""
        self.root = str(self.root)
        self.log_level = self.log_level.upper()

    @property
    def is_cloud(self) -> bool:
        return is_cloud_path(self.root)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "MirrorConfig":
        """Load configuration from file.

        Args:
            config_path: Path to config file. If None, uses default location.

        Returns:
            MirrorConfig instance (defaults if the file does not exist)
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if not config_path.exists():
            return cls()

        with open(config_path, "r") as f:
            data = json.load(f)

        return cls(**data)

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save configuration to file.

        Args:
            config_path: Path to config file. If None, uses default location.
        """
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "root": self.root,
            "read_only": self.read_only,
            "log_level": self.log_level,
        }

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def from_env(cls) -> "MirrorConfig":
        """Create configuration from environment variables.

        Environment variables:
            MIRRORFS_ROOT: Directory or cloud URL to mirror
            MIRRORFS_READ_ONLY: Reject mutations (true/false)
            MIRRORFS_LOG_LEVEL: Logging level name

        Returns:
            MirrorConfig instance
        """
        config = cls()

        if os.getenv("MIRRORFS_ROOT"):
            config.root = os.getenv("MIRRORFS_ROOT")

        if os.getenv("MIRRORFS_READ_ONLY"):
            config.read_only = os.getenv("MIRRORFS_READ_ONLY", "").lower() == "true"

        if os.getenv("MIRRORFS_LOG_LEVEL"):
            config.log_level = os.getenv("MIRRORFS_LOG_LEVEL", "").upper()

        return config


def build_fetcher(config: MirrorConfig) -> Fetcher:
    """Create the fetcher matching the configured root."""
    if config.is_cloud:
        return CloudFetcher(config.root)
    return LocalFetcher(config.root)


def build_cache(config: MirrorConfig) -> MirrorCache:
    """Create a MirrorCache for the configured root."""
    return MirrorCache(build_fetcher(config), read_only=config.read_only)
