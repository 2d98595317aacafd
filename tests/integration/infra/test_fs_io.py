from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, data directory resolution and whole-file
text I/O.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from assetcdn.infra.fs import (
    delete_file,
    get_user_data_dir,
    normalize_path,
    read_text,
    write_text,
)


def test_get_user_data_dir_unix() -> None:
    """TC-01: Resolution of ~/.assetcdn on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.assetcdn")


def test_normalize_path_relative_and_fallback(tmp_path: Path) -> None:
    """TC-02: Relative paths resolve against the cwd; empty input uses the fallback."""
    with patch("os.getcwd", return_value=str(tmp_path)):
        assert normalize_path("", fallback=str(tmp_path)) == str(tmp_path)
    assert normalize_path("dist", fallback=".") == os.path.abspath("dist")


def test_normalize_path_expands_variables() -> None:
    """TC-03: Environment variables are expanded."""
    with patch.dict(os.environ, {"BUILD_ROOT": "my_build"}):
        path = normalize_path("$BUILD_ROOT/out", fallback=".")
    assert path.endswith(os.path.join("my_build", "out"))


def test_text_round_trip_and_delete(tmp_path: Path) -> None:
    """TC-04: Text written is read back verbatim; delete removes the file."""
    target = tmp_path / "app.js"
    write_text(str(target), "const s = 'ünïcödé';")

    assert read_text(str(target)) == "const s = 'ünïcödé';"

    delete_file(str(target))
    assert not target.exists()


def test_missing_file_errors_propagate(tmp_path: Path) -> None:
    """TC-05: Filesystem failures are not swallowed."""
    with pytest.raises(OSError):
        read_text(str(tmp_path / "missing.js"))
    with pytest.raises(OSError):
        delete_file(str(tmp_path / "missing.js"))
