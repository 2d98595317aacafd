from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Merging of JSON config files over defaults.
3. Resilience against missing or corrupted config files.
4. Token resolution from the environment.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

from assetcdn.domain.config import get_default_config, load_config
from assetcdn.domain.constants import TOKEN_ENV_VAR


def test_get_default_config_completeness() -> None:
    defaults = get_default_config()

    keys = [
        "output_dir", "base", "upload_endpoint", "upload_token", "https",
        "image_domains", "static_domains", "upload_timeout", "round_size", "log_file",
    ]
    for k in keys:
        assert k in defaults


def test_default_domain_lists_are_independent() -> None:
    first = get_default_config()
    first["static_domains"].append("mutated.example.com")

    assert "mutated.example.com" not in get_default_config()["static_domains"]


def test_load_config_merges_file(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.json"
    config_path.write_text(json.dumps({"base": "/app/", "round_size": 3}), encoding="utf-8")

    cfg = load_config(str(config_path))

    assert cfg["base"] == "/app/"
    assert cfg["round_size"] == 3
    assert cfg["output_dir"] == "dist"


def test_load_config_reads_default_file_from_cwd(tmp_path: Path) -> None:
    (tmp_path / "assetcdn.json").write_text(json.dumps({"output_dir": "build"}), encoding="utf-8")

    with patch("os.getcwd", return_value=str(tmp_path)):
        cfg = load_config()

    assert cfg["output_dir"] == "build"


def test_load_corrupted_file_returns_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{ incomplete json ", encoding="utf-8")

    cfg = load_config(str(config_path))

    assert cfg == load_config(str(tmp_path / "missing.json"))
    assert cfg["base"] == "/"


def test_load_non_object_file_returns_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "list.json"
    config_path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_config(str(config_path))["output_dir"] == "dist"


def test_token_is_read_from_environment(tmp_path: Path) -> None:
    with patch.dict(os.environ, {TOKEN_ENV_VAR: "secret-token"}):
        cfg = load_config(str(tmp_path / "missing.json"))

    assert cfg["upload_token"] == "secret-token"


def test_configured_token_wins_over_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    config_path.write_text(json.dumps({"upload_token": "from-file"}), encoding="utf-8")

    with patch.dict(os.environ, {TOKEN_ENV_VAR: "from-env"}):
        cfg = load_config(str(config_path))

    assert cfg["upload_token"] == "from-file"
