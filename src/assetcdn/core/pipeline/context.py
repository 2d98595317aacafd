from __future__ import annotations

"""
Per-Run Rewrite Context.

Bundles every piece of state one post-processing run shares between its
components. A fresh context is built for each run so nothing leaks from
one build into the next.
"""

from dataclasses import dataclass, field
from typing import List, Protocol

from assetcdn.core.services.batching import UploadBatchQueue
from assetcdn.core.services.cache import UploadCache
from assetcdn.domain.models import FileRecord


class Uploader(Protocol):
    """Anything able to publish a local file and return its remote location."""

    async def upload(self, file_path: str) -> str:
        ...


@dataclass
class RewriteContext:
    """
    Shared state of a single run.

    Attributes:
        base: Public path prefix, always ending with '/'.
        output_dir: Absolute build output directory.
        files: Every graph-participating file of the build output.
        uploader: Upload primitive.
        cache: Write-once file name to remote location mapping.
        queue: Round-based upload executor.
        uploaded_paths: Local paths uploaded so far, in upload order.
    """
    base: str
    output_dir: str
    files: List[FileRecord]
    uploader: Uploader
    cache: UploadCache = field(default_factory=UploadCache)
    queue: UploadBatchQueue = field(default_factory=UploadBatchQueue)
    uploaded_paths: List[str] = field(default_factory=list)


def create_context(
        base: str,
        output_dir: str,
        files: List[FileRecord],
        uploader: Uploader,
        round_size: int = 0,
) -> RewriteContext:
    """Build a fresh context with an empty cache and queue."""
    return RewriteContext(
        base=base,
        output_dir=output_dir,
        files=list(files),
        uploader=uploader,
        queue=UploadBatchQueue(round_size=round_size),
    )
