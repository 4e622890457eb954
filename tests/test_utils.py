"""Unit tests for utility functions."""

import pytest

from pyrelup.utils import (
    format_size,
    guess_mime_type,
    is_glob_pattern,
    normalize_asset_name,
)


class TestNormalizeAssetName:
    """Tests for normalize_asset_name function."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("café.txt", "cafe.txt"),
            ("...hidden", "default.hidden"),
            ("a/b*c?.bin", "abc.bin"),
            ("trailing...", "trailing"),
            ("plain-name_1.0.tar.gz", "plain-name_1.0.tar.gz"),
            ("my file (1).zip", "myfile1.zip"),
            ("Ünïcödé.md", "Unicode.md"),
        ],
    )
    def test_documented_examples(self, name, expected):
        """Test the normalization examples."""
        assert normalize_asset_name(name) == expected

    def test_only_dots(self):
        """Test that a name made only of dots becomes empty."""
        assert normalize_asset_name("...") == ""

    def test_leading_and_trailing_dots(self):
        """Test leading dots are replaced after trailing dots are stripped."""
        assert normalize_asset_name("..config..") == "default.config"

    def test_dot_after_removed_characters(self):
        """Test a leading dot exposed by removing illegal characters."""
        assert normalize_asset_name(" .env") == "default.env"

    def test_non_latin_characters_removed(self):
        """Test that characters without an ASCII base are dropped."""
        assert normalize_asset_name("日本語.txt") == "default.txt"

    @pytest.mark.parametrize(
        "name",
        ["café.txt", "...hidden", "a/b*c?.bin", "trailing...", ". .x. .", "", "ñ"],
    )
    def test_idempotent(self, name):
        """Test that normalizing twice gives the same result."""
        once = normalize_asset_name(name)
        assert normalize_asset_name(once) == once


class TestGuessMimeType:
    """Tests for guess_mime_type function."""

    def test_known_extension(self):
        """Test a well-known extension."""
        assert guess_mime_type("notes.txt") == "text/plain"

    def test_unknown_extension_defaults_to_octet_stream(self):
        """Test fallback for unknown extensions."""
        assert guess_mime_type("binary.unknownext") == "application/octet-stream"

    def test_no_extension(self):
        """Test fallback for names without extension."""
        assert guess_mime_type("LICENSE") == "application/octet-stream"


class TestIsGlobPattern:
    """Tests for is_glob_pattern function."""

    def test_star(self):
        assert is_glob_pattern("dist/*.whl")

    def test_question_mark(self):
        assert is_glob_pattern("file?.txt")

    def test_literal_path(self):
        assert not is_glob_pattern("dist/app.tar.gz")


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(256) == "256 B"

    def test_kilobytes(self):
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(2 * 1024 * 1024 * 1024) == "2.0 GB"
