from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess. These tests validate argument parsing, exit codes,
stream output (stdout/stderr) and file system side effects.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "assetcdn" / "main.py"


def run_cli(args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Helper to execute the CLI in a separate process.

    Injects the 'src' directory into PYTHONPATH so the package resolves
    without being installed.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env.pop("ASSETCDN_UPLOAD_TOKEN", None)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


def test_cli_help_displays_usage(tmp_path: Path) -> None:
    """TC-01: --help exits cleanly and documents the main options."""
    result = run_cli(["--help"], cwd=tmp_path)

    assert result.returncode == 0
    assert "usage:" in result.stdout
    assert "--output-dir" in result.stdout
    assert "--endpoint" in result.stdout


def test_cli_missing_output_dir_exits_2(tmp_path: Path) -> None:
    """TC-02: A non-existent build directory is a usage error."""
    result = run_cli(["-d", str(tmp_path / "ghost"), "--use-defaults"], cwd=tmp_path)

    assert result.returncode == 2
    assert "Output directory does not exist" in result.stderr


def test_cli_dump_config_redacts_token(tmp_path: Path) -> None:
    """TC-03: --dump-config prints the effective config without the secret."""
    result = run_cli(
        [
            "--use-defaults",
            "--dump-config",
            "--base", "/static",
            "--token", "s3cr3t",
            "--endpoint", "https://upload.example.com",
        ],
        cwd=tmp_path,
    )

    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["base"] == "/static/"
    assert data["upload_endpoint"] == "https://upload.example.com"
    assert data["upload_token"] == "***"
    assert "s3cr3t" not in result.stdout


def test_cli_circular_reference_fails(tmp_path: Path) -> None:
    """TC-04: A reference cycle aborts with exit code 1 before any network call."""
    dist = tmp_path / "dist"
    dist.mkdir()
    (dist / "index.html").write_text('<script src="/a.js"></script>', encoding="utf-8")
    (dist / "a.js").write_text("import './b.js'", encoding="utf-8")
    (dist / "b.js").write_text("import './a.js'", encoding="utf-8")

    result = run_cli(
        ["-d", str(dist), "--use-defaults", "--endpoint", "http://127.0.0.1:9", "--json"],
        cwd=tmp_path,
    )

    assert result.returncode == 1
    payload = json.loads(result.stdout)
    assert payload["ok"] is False
    assert payload["summary"]["error_type"] == "CircularReferenceError"
    assert (dist / "a.js").exists()
    assert (dist / "b.js").exists()
