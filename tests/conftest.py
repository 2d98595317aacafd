from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fake upload primitive that records every call.
3. A factory writing a build output tree to a temporary directory.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from assetcdn.domain.errors import UploadFailure  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class FakeUploader:
    """
    Upload primitive double.

    Returns 'https://cdn.test/<basename>' and yields to the event loop before
    answering so that concurrent requests really interleave.
    """

    def __init__(self, fail_on: Optional[Set[str]] = None) -> None:
        self.calls: List[str] = []
        self.fail_on = fail_on or set()

    async def upload(self, file_path: str) -> str:
        self.calls.append(file_path)
        await asyncio.sleep(0)
        name = os.path.basename(file_path)
        if name in self.fail_on:
            raise UploadFailure(file_path, f"simulated upload rejection for {name}")
        return f"https://cdn.test/{name}"

    def uploaded_names(self) -> List[str]:
        return [os.path.basename(p) for p in self.calls]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fake_uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def build_output(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """
    Return a factory writing {relative_path: content} into tmp_path/dist.

    Returns:
        Callable: Factory returning the build root directory.
    """
    def _factory(files: Dict[str, str]) -> Path:
        root = tmp_path / "dist"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return root

    return _factory
