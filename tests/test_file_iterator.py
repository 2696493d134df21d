"""Tests for recursive file enumeration."""

import os

from covfilter._file_iterator import iter_files, list_files


def rel(paths, root):
    return [os.path.relpath(p, root).replace(os.sep, "/") for p in paths]


class TestIterFiles:
    def test_empty_filters_match_everything(self, source_tree):
        assert rel(list_files(source_tree), source_tree) == [
            "app/__init__.py",
            "app/core.py",
            "app/notes.txt",
            "app/test_core.py",
            "app/sub/helpers.py",
            "tests/test_app.py",
        ]

    def test_suffix(self, source_tree):
        assert rel(list_files(source_tree, ".txt"), source_tree) == ["app/notes.txt"]

    def test_prefix(self, source_tree):
        assert rel(list_files(source_tree, ".py", "test_"), source_tree) == [
            "app/test_core.py",
            "tests/test_app.py",
        ]

    def test_sequences_of_suffixes_and_prefixes(self, source_tree):
        found = rel(list_files(source_tree, [".txt", ".py"], ["notes", "helpers"]), source_tree)
        assert found == ["app/notes.txt", "app/sub/helpers.py"]

    def test_prefix_applies_to_file_name_not_path(self, source_tree):
        assert list_files(source_tree, ".py", "app") == []

    def test_yields_absolute_paths(self, source_tree, monkeypatch):
        monkeypatch.chdir(source_tree)
        files = list_files("app/sub")
        assert files == [os.path.join(os.path.abspath("app/sub"), "helpers.py")]
        assert all(os.path.isabs(p) for p in files)

    def test_missing_directory_yields_nothing(self, tmp_path):
        assert list(iter_files(tmp_path / "missing")) == []

    def test_file_instead_of_directory_yields_nothing(self, source_tree):
        assert list(iter_files(source_tree / "app" / "core.py")) == []

    def test_is_lazy(self, source_tree):
        iterator = iter_files(source_tree)
        assert next(iterator).endswith("__init__.py")
