"""
Tests for command path resolution.

Uses real executables in temporary $PATH folders.
"""

import errno

import pytest

from conftest import make_executable
from delauncher.errors import NameTooLongError
from delauncher.utils.pathsearch import PATH_MAX, can_execute, command_path


class TestCanExecute:
    """Test the executable regular file check."""

    def test_executable_script(self, tmp_path):
        script = make_executable(tmp_path, "tool")
        assert can_execute(str(script)) is True

    def test_plain_file_is_not_executable(self, tmp_path):
        plain = tmp_path / "notes.txt"
        plain.write_text("hello")
        assert can_execute(str(plain)) is False

    def test_directory_is_not_a_regular_file(self, tmp_path):
        folder = tmp_path / "folder"
        folder.mkdir()
        folder.chmod(0o755)
        assert can_execute(str(folder)) is False

    def test_missing_file(self, tmp_path):
        assert can_execute(str(tmp_path / "missing")) is False


class TestCommandPath:
    """Test $PATH search semantics."""

    def test_finds_command_in_path(self, bin_dir):
        make_executable(bin_dir, "foo")
        assert command_path("foo") == f"{bin_dir}/foo"

    def test_first_match_wins(self, tmp_path, monkeypatch):
        first = tmp_path / "a"
        second = tmp_path / "b"
        make_executable(first, "foo")
        make_executable(second, "foo")
        monkeypatch.setenv("PATH", f"{first}:{second}")
        assert command_path("foo") == f"{first}/foo"

    def test_skips_folders_without_match(self, tmp_path, monkeypatch):
        first = tmp_path / "a"
        first.mkdir()
        second = tmp_path / "b"
        make_executable(second, "foo")
        monkeypatch.setenv("PATH", f"{first}:{second}")
        assert command_path("foo") == f"{second}/foo"

    def test_skips_non_executable_match(self, tmp_path, monkeypatch):
        first = tmp_path / "a"
        first.mkdir()
        (first / "foo").write_text("not a program")
        second = tmp_path / "b"
        make_executable(second, "foo")
        monkeypatch.setenv("PATH", f"{first}:{second}")
        assert command_path("foo") == f"{second}/foo"

    def test_trailing_slash_in_path_entry(self, bin_dir, monkeypatch):
        make_executable(bin_dir, "foo")
        monkeypatch.setenv("PATH", f"{bin_dir}/")
        assert command_path("foo") == f"{bin_dir}/foo"

    def test_not_found(self, bin_dir):
        assert command_path("nonexistent") is None

    def test_unset_path_never_resolves(self, in_tmp_cwd, monkeypatch):
        make_executable(in_tmp_cwd, "foo")
        monkeypatch.delenv("PATH", raising=False)
        assert command_path("foo") is None

    def test_empty_entry_is_current_directory(self, in_tmp_cwd, tmp_path, monkeypatch):
        make_executable(in_tmp_cwd, "foo")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.setenv("PATH", f"{elsewhere}::")
        assert command_path("foo") == "./foo"

    def test_slash_means_no_path_search(self, in_tmp_cwd, bin_dir):
        # ./foo must not be found through $PATH
        make_executable(bin_dir, "foo")
        assert command_path("./foo") is None

        make_executable(in_tmp_cwd, "foo")
        assert command_path("./foo") == "./foo"

    def test_absolute_path(self, bin_dir, monkeypatch):
        script = make_executable(bin_dir, "foo")
        monkeypatch.delenv("PATH", raising=False)
        assert command_path(str(script)) == str(script)

    def test_name_too_long(self, bin_dir):
        with pytest.raises(NameTooLongError) as excinfo:
            command_path("x" * PATH_MAX)
        assert excinfo.value.errno == errno.ENAMETOOLONG

    def test_path_with_slash_too_long(self):
        with pytest.raises(NameTooLongError):
            command_path("/" + "x" * PATH_MAX)
