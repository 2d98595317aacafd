from __future__ import annotations

"""
Rewrite Domain Data Models.

Defines the records produced by the directory walk, the deferred upload
job unit, and the result object returned to the interface layer.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from assetcdn.domain.constants import (
    KIND_ASSET,
    KIND_MARKUP,
    KIND_SCRIPT,
    KIND_STYLESHEET,
    MARKUP_EXTENSIONS,
    SCRIPT_EXTENSIONS,
    STYLESHEET_EXTENSIONS,
)

# -----------------------------------------------------------------------------
# GRAPH MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    A single file discovered in the build output.

    Attributes:
        file_name: Base name, the identity key for graph and cache purposes.
        full_path: Absolute filesystem path.
        prefix: Directory path relative to the build root, without leading
                slash and with a trailing slash when non-empty.
    """
    file_name: str
    full_path: str
    prefix: str = ""

    @property
    def extension(self) -> str:
        return os.path.splitext(self.file_name)[1]

    @property
    def kind(self) -> str:
        """Classify by extension (case-sensitive, like the exclusion filter)."""
        ext = self.extension
        if ext in SCRIPT_EXTENSIONS:
            return KIND_SCRIPT
        if ext in MARKUP_EXTENSIONS:
            return KIND_MARKUP
        if ext in STYLESHEET_EXTENSIONS:
            return KIND_STYLESHEET
        return KIND_ASSET

    @property
    def is_markup(self) -> bool:
        return self.kind == KIND_MARKUP

    @property
    def is_script(self) -> bool:
        return self.kind == KIND_SCRIPT

    @property
    def is_rewritable(self) -> bool:
        return self.kind != KIND_ASSET

    @property
    def rel_path(self) -> str:
        return f"{self.prefix}{self.file_name}"


@dataclass
class UploadJob:
    """Deferred upload work for one file, executed by the batching queue."""
    file_name: str
    callback: Callable[[], Awaitable[None]]

# -----------------------------------------------------------------------------
# RESULT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RewriteResult:
    """
    Outcome of a complete post-processing run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        output_dir: Absolute build output directory that was processed.
        base: Normalized public path prefix.
        entries: Relative paths of the entry documents that were visited.
        uploaded: Mapping of file name to resolved remote location.
        deleted: Local paths removed after uploading.
        summary: Execution statistics.
    """
    ok: bool
    error: str

    output_dir: str
    base: str

    entries: List[str] = field(default_factory=list)
    uploaded: Dict[str, str] = field(default_factory=dict)
    deleted: List[str] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        output_dir: str,
        base: str,
        summary_extra: Optional[Dict[str, Any]] = None
) -> RewriteResult:
    """
    Create a failed rewrite result instance.

    Args:
        error: Detailed error description.
        output_dir: The build directory targeted by the run.
        base: Public path in effect.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        RewriteResult: An immutable error result object.
    """
    return RewriteResult(
        ok=False,
        error=error,
        output_dir=output_dir,
        base=base,
        summary=summary_extra or {},
    )


def create_success_result(
        output_dir: str,
        base: str,
        entries: List[str],
        uploaded: Dict[str, str],
        deleted: List[str],
        summary_extra: Optional[Dict[str, Any]] = None
) -> RewriteResult:
    """
    Create a successful rewrite result instance.

    Returns:
        RewriteResult: An immutable success result object.
    """
    return RewriteResult(
        ok=True,
        error="",
        output_dir=output_dir,
        base=base,
        entries=list(entries),
        uploaded=dict(uploaded),
        deleted=list(deleted),
        summary=summary_extra or {},
    )
