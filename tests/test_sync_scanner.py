"""Tests for local file resolution."""

import pytest

from pyrelup.exceptions import ReleaseConfigError, ReleaseFileNotFoundError
from pyrelup.sync import LocalFile, expand_file_spec, resolve_files


class TestLocalFile:
    """Tests for LocalFile."""

    def test_from_path(self, make_file):
        """Test metadata derived from a file."""
        path = make_file("dist/app-1.0.tar.gz", b"12345")
        local = LocalFile.from_path(path)

        assert local.path == path
        assert local.asset_name == "app-1.0.tar.gz"
        assert local.size == 5
        assert local.mime_type == "application/x-tar"
        assert local.read_bytes() == b"12345"

    def test_unknown_type(self, make_file):
        local = LocalFile.from_path(make_file("data.weird"))
        assert local.mime_type == "application/octet-stream"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ReleaseFileNotFoundError, match="File not found"):
            LocalFile.from_path(tmp_path / "missing.txt")

    def test_directory_is_rejected(self, tmp_path):
        with pytest.raises(ReleaseFileNotFoundError):
            LocalFile.from_path(tmp_path)

    def test_reads_current_content(self, make_file):
        """Test that content is read from disk on every call."""
        path = make_file("a.txt", b"one")
        local = LocalFile.from_path(path)
        path.write_bytes(b"two")
        assert local.read_bytes() == b"two"


class TestExpandFileSpec:
    """Tests for expand_file_spec."""

    def test_literal_path_unchanged(self):
        paths = expand_file_spec("does/not/matter.txt")
        assert [str(p) for p in paths] == ["does/not/matter.txt"]

    def test_glob_sorted_files_only(self, tmp_path, make_file):
        make_file("b.zip")
        make_file("a.zip")
        (tmp_path / "dir.zip").mkdir()

        paths = expand_file_spec(str(tmp_path / "*.zip"))

        assert [p.name for p in paths] == ["a.zip", "b.zip"]

    def test_recursive_glob(self, tmp_path, make_file):
        make_file("top.whl")
        make_file("nested/deep/inner.whl")

        paths = expand_file_spec(str(tmp_path / "**" / "*.whl"))

        assert sorted(p.name for p in paths) == ["inner.whl", "top.whl"]


class TestResolveFiles:
    """Tests for resolve_files."""

    def test_order_follows_specs(self, tmp_path, make_file):
        """Test that output order matches input order."""
        make_file("z.txt")
        make_file("x.bin")
        make_file("y.bin")

        files = resolve_files([str(tmp_path / "z.txt"), str(tmp_path / "*.bin")])

        assert [f.asset_name for f in files] == ["z.txt", "x.bin", "y.bin"]

    def test_blank_specs_ignored(self, make_file):
        path = make_file("a.txt")
        files = resolve_files(["", "  ", str(path)])
        assert len(files) == 1

    def test_no_specs(self):
        with pytest.raises(ReleaseConfigError, match="invalid `files` input"):
            resolve_files([])

    def test_glob_without_matches(self, tmp_path):
        with pytest.raises(ReleaseConfigError, match="No files to process"):
            resolve_files([str(tmp_path / "*.none")])

    def test_missing_literal_file(self, tmp_path):
        with pytest.raises(ReleaseFileNotFoundError):
            resolve_files([str(tmp_path / "missing.txt")])
