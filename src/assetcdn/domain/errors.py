from __future__ import annotations

"""
Domain Exception Hierarchy.

Every failure raised by the rewrite engine is fatal for the current run.
The hierarchy only exists so callers can tell the failure categories apart
when reporting them.
"""

from typing import Sequence, Tuple


class AssetCdnError(Exception):
    """Base class for all fatal post-processing failures."""


class ConfigurationError(AssetCdnError):
    """Raised when the run cannot start because settings are unusable."""


class CircularReferenceError(AssetCdnError):
    """
    A file is reachable from itself along a single traversal path.

    Attributes:
        path: File names on the active traversal path, root first.
        closing: The file name that closed the cycle.
    """

    def __init__(self, path: Sequence[str], closing: str) -> None:
        self.path: Tuple[str, ...] = tuple(path)
        self.closing = closing
        chain = " -> ".join(self.path + (closing,))
        super().__init__(f"Circular reference detected: {chain}")


class UploadFailure(AssetCdnError):
    """
    The upload primitive rejected a file.

    Attributes:
        file_path: Local path of the file that failed to upload.
        reason: Human readable failure description.
    """

    def __init__(self, file_path: str, reason: str) -> None:
        self.file_path = file_path
        self.reason = reason
        super().__init__(f"Upload failed for '{file_path}': {reason}")


class DuplicateAssetNameError(AssetCdnError):
    """
    Two files in the build output share the same base name.

    Base names are the identity key for the reference graph and the upload
    cache, so a collision would silently merge two different assets.
    """

    def __init__(self, file_name: str, paths: Sequence[str]) -> None:
        self.file_name = file_name
        self.paths: Tuple[str, ...] = tuple(paths)
        listing = ", ".join(self.paths)
        super().__init__(f"Duplicate asset name '{file_name}' found at: {listing}")
