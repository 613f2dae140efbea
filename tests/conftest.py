"""
Shared test fixtures for the DEL test suite.

Provides a private $PATH folder with real executables, desktop entry files
and a command list location, all using real file I/O (no mocking of the
filesystem).
"""

import stat
import sys
from pathlib import Path

import pytest
from loguru import logger


def make_executable(folder: Path, name: str, body: str = "#!/bin/sh\nexit 0\n") -> Path:
    """Write an executable shell script named name inside folder."""
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / name
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def write_desktop_entry(folder: Path, filename: str, body: str) -> Path:
    """Write a desktop entry file inside folder."""
    folder.mkdir(parents=True, exist_ok=True)
    path = folder / filename
    path.write_text(body)
    return path


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo setup_logging() calls made by the code under test."""
    yield
    logger.remove()
    logger.add(lambda m: sys.stderr.write(m), level="DEBUG")


@pytest.fixture
def bin_dir(tmp_path, monkeypatch):
    """A folder that is the only entry of $PATH."""
    folder = tmp_path / "bin"
    folder.mkdir()
    monkeypatch.setenv("PATH", str(folder))
    return folder


@pytest.fixture
def apps_dir(tmp_path):
    """Empty folder to hold desktop entries."""
    folder = tmp_path / "applications"
    folder.mkdir()
    return folder


@pytest.fixture
def list_path(tmp_path):
    """Location of the persisted command list (not created)."""
    return str(tmp_path / "del-list")


@pytest.fixture
def log_messages():
    """Capture loguru diagnostics as plain strings."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings lookup at a file inside tmp_path."""
    settings_file = tmp_path / "settings.toml"
    monkeypatch.setenv("DEL_CONFIG", str(settings_file))
    return settings_file


@pytest.fixture
def in_tmp_cwd(tmp_path, monkeypatch):
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def read_lines(path) -> list:
    with open(path) as f:
        return f.read().splitlines()
