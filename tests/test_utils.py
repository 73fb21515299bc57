"""Tests for mirrorfs path utilities."""

from pathlib import PurePosixPath, PureWindowsPath

import pytest

from mirrorfs.utils import ROOT, is_cloud_path, normalize_path, parent_path, relative_key


class TestIsCloudPath:
    """Test cloud URL detection."""

    @pytest.mark.parametrize(
        "path", ["s3://bucket/x", "gs://bucket", "gcs://b/p", "az://c/d", "file:///tmp"]
    )
    def test_cloud_paths(self, path):
        """Test cloud protocols are detected."""
        assert is_cloud_path(path) is True

    @pytest.mark.parametrize("path", ["/local/path", "relative/dir", "."])
    def test_local_paths(self, path):
        """Test local paths are not cloud paths."""
        assert is_cloud_path(path) is False


class TestNormalizePath:
    """Test mirror key normalization."""

    def test_absolute(self):
        """Test absolute paths are kept."""
        assert normalize_path("/a/b") == PurePosixPath("/a/b")

    def test_relative_anchored_at_root(self):
        """Test relative paths are anchored at the root."""
        assert normalize_path("a/b") == PurePosixPath("/a/b")

    def test_trailing_slash_and_dot(self):
        """Test trailing slashes and '.' components are dropped."""
        assert normalize_path("/a/./b/") == PurePosixPath("/a/b")

    def test_empty_is_root(self):
        """Test empty string and '/' both mean the root."""
        assert normalize_path("") == ROOT
        assert normalize_path("/") == ROOT

    def test_pure_path_input(self):
        """Test PurePath objects are accepted."""
        assert normalize_path(PurePosixPath("x/y")) == PurePosixPath("/x/y")
        assert normalize_path(PureWindowsPath("x\\y")) == PurePosixPath("/x/y")

    def test_case_is_preserved(self):
        """Test no case folding is applied."""
        assert normalize_path("/A") != normalize_path("/a")

    def test_parent_reference_rejected(self):
        """Test '..' components are rejected."""
        with pytest.raises(ValueError, match="Parent references"):
            normalize_path("/a/../b")


class TestParentAndRelative:
    """Test parent lookup and relative keys."""

    def test_parent_path(self):
        """Test parent of a nested path."""
        assert parent_path(PurePosixPath("/a/b")) == PurePosixPath("/a")
        assert parent_path(PurePosixPath("/a")) == ROOT

    def test_root_has_no_parent(self):
        """Test the root has no parent."""
        assert parent_path(ROOT) is None

    def test_relative_key(self):
        """Test keys relative to the root."""
        assert relative_key(PurePosixPath("/a/b")) == "a/b"
        assert relative_key(ROOT) == ""
