"""Tests for the text classifier."""

import pytest

from repo_explorer.services.text_classifier import TEXT_EXTENSIONS, file_extension, is_text_file


class TestFileExtension:
    def test_simple(self):
        assert file_extension("README.md") == "md"

    def test_lowercases(self):
        assert file_extension("src/App.TSX") == "tsx"

    def test_no_dot(self):
        assert file_extension("Makefile") == ""

    def test_trailing_dot(self):
        assert file_extension("notes.") == ""

    def test_dot_in_directory_only(self):
        assert file_extension("pkg.v2/LICENSE") == ""

    def test_last_dot_wins(self):
        assert file_extension("dist/app.min.js") == "js"

    def test_dotfile(self):
        assert file_extension(".env") == "env"


class TestIsTextFile:
    @pytest.mark.parametrize("ext", sorted(TEXT_EXTENSIONS))
    def test_allow_listed_extensions(self, ext):
        assert is_text_file(f"dir/file.{ext}")
        assert is_text_file(f"dir/FILE.{ext.upper()}")

    @pytest.mark.parametrize(
        "path",
        ["Makefile", "a/b/main.RS", "logo.png", "archive.tar.gz", "notes.", "bin/tool.exe", ""],
    )
    def test_rejected(self, path):
        assert not is_text_file(path)

    def test_readme(self):
        assert is_text_file("README.md")
