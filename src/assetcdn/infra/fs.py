from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization and whole-file text I/O used by the rewrite
engine. Failures are not caught here: a filesystem error during
post-processing is fatal and must reach the pipeline.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "AssetCDN"
UNIX_APP_DIR_NAME = ".assetcdn"
TEXT_ENCODING = "utf-8"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/AssetCDN
    - Linux/Mac: ~/.assetcdn

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Relative paths resolve against the working directory.
    Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# TEXT I/O API
# -----------------------------------------------------------------------------

def read_text(path: str) -> str:
    """Read a whole file as UTF-8 text."""
    with open(path, "r", encoding=TEXT_ENCODING) as f:
        return f.read()


def write_text(path: str, text: str) -> None:
    """Replace the full content of a file with UTF-8 text."""
    with open(path, "w", encoding=TEXT_ENCODING) as f:
        f.write(text)


def delete_file(path: str) -> None:
    """Remove a single file from disk."""
    os.remove(path)
