"""Tests for mirror configuration."""

import pytest

from mirrorfs import CloudFetcher, LocalFetcher, MirrorCache, MirrorConfig
from mirrorfs.config import build_cache, build_fetcher


class TestMirrorConfig:
    """Test MirrorConfig defaults and persistence."""

    def test_defaults(self):
        """Test default configuration."""
        config = MirrorConfig()

        assert config.root == "."
        assert config.read_only is False
        assert config.log_level == "WARNING"
        assert config.is_cloud is False

    def test_normalizes_fields(self, tmp_path):
        """Test root becomes a string and log level is upper-cased."""
        config = MirrorConfig(root=tmp_path, log_level="debug")

        assert config.root == str(tmp_path)
        assert config.log_level == "DEBUG"

    def test_cloud_root(self):
        """Test cloud roots are detected."""
        assert MirrorConfig(root="gs://bucket/x").is_cloud is True

    def test_save_and_load(self, tmp_path):
        """Test round trip through a config file."""
        path = tmp_path / "conf" / "config.json"
        MirrorConfig(root="s3://b/p", read_only=True, log_level="INFO").save(path)

        loaded = MirrorConfig.load(path)

        assert loaded == MirrorConfig(root="s3://b/p", read_only=True, log_level="INFO")

    def test_load_missing_file(self, tmp_path):
        """Test loading a missing file returns defaults."""
        assert MirrorConfig.load(tmp_path / "absent.json") == MirrorConfig()

    def test_from_env(self, monkeypatch):
        """Test environment variables override defaults."""
        monkeypatch.setenv("MIRRORFS_ROOT", "/data")
        monkeypatch.setenv("MIRRORFS_READ_ONLY", "TRUE")
        monkeypatch.setenv("MIRRORFS_LOG_LEVEL", "info")

        config = MirrorConfig.from_env()

        assert config.root == "/data"
        assert config.read_only is True
        assert config.log_level == "INFO"

    def test_from_env_unset(self, monkeypatch):
        """Test unset variables keep defaults."""
        for name in ("MIRRORFS_ROOT", "MIRRORFS_READ_ONLY", "MIRRORFS_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        assert MirrorConfig.from_env() == MirrorConfig()


class TestBuilders:
    """Test fetcher and cache construction."""

    def test_local_fetcher(self, tmp_path):
        """Test local roots build a LocalFetcher."""
        fetcher = build_fetcher(MirrorConfig(root=str(tmp_path)))

        assert isinstance(fetcher, LocalFetcher)
        assert fetcher.root == tmp_path

    def test_cloud_fetcher(self):
        """Test cloud roots build a CloudFetcher."""
        fetcher = build_fetcher(MirrorConfig(root="gs://bucket/prefix"))

        assert isinstance(fetcher, CloudFetcher)
        assert fetcher.url == "gs://bucket/prefix"

    def test_build_cache(self, tmp_path):
        """Test caches are independent instances carrying read_only."""
        config = MirrorConfig(root=str(tmp_path), read_only=True)

        first = build_cache(config)
        second = build_cache(config)

        assert isinstance(first, MirrorCache)
        assert first is not second
        assert first.read_only is True

    @pytest.mark.parametrize("root", ["~", "~/projects"])
    def test_local_root_expands_user(self, root):
        """Test '~' is expanded for local roots."""
        fetcher = build_fetcher(MirrorConfig(root=root))

        assert "~" not in str(fetcher.root)
