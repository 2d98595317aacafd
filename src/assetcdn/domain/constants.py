from __future__ import annotations

"""
Global Domain Constants.

Centralizes the file-kind classification and the default CDN settings
shared by the scanner, the reference graph and the upload client.
"""

from typing import Final, FrozenSet, List, Tuple

CURRENT_CONFIG_VERSION: Final[str] = "1.0.0"
DEFAULT_CONFIG_FILENAME: Final[str] = "assetcdn.json"
TOKEN_ENV_VAR: Final[str] = "ASSETCDN_UPLOAD_TOKEN"

# -----------------------------------------------------------------------------
# FILE KIND CLASSIFICATION
# -----------------------------------------------------------------------------

SCRIPT_EXTENSIONS: Final[Tuple[str, ...]] = (".js",)
MARKUP_EXTENSIONS: Final[Tuple[str, ...]] = (".html",)
STYLESHEET_EXTENSIONS: Final[Tuple[str, ...]] = (".css",)

# Never part of the reference/upload graph (source maps, plain text)
EXCLUDED_EXTENSIONS: Final[Tuple[str, ...]] = (".txt", ".map")

IMAGE_EXTENSIONS: Final[FrozenSet[str]] = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".ico", ".bmp", ".avif",
})

KIND_SCRIPT: Final[str] = "script"
KIND_MARKUP: Final[str] = "markup"
KIND_STYLESHEET: Final[str] = "stylesheet"
KIND_ASSET: Final[str] = "asset"

# -----------------------------------------------------------------------------
# CDN DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_BASE: Final[str] = "/"
DEFAULT_OUTPUT_DIR: Final[str] = "dist"
DEFAULT_UPLOAD_TIMEOUT: Final[int] = 30

DEFAULT_IMAGE_DOMAINS: Final[List[str]] = [
    "p1.ssl.qhimg.com",
    "p2.ssl.qhimg.com",
]

DEFAULT_STATIC_DOMAINS: Final[List[str]] = [
    "s0.ssl.qhimg.com",
    "s1.ssl.qhimg.com",
    "s2.ssl.qhimg.com",
    "s3.ssl.qhimg.com",
]
