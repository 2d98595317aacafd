from __future__ import annotations

"""
Recursive Rewrite Orchestrator.

Walks the reference graph depth-first from every entry document. A file's
references are resolved (uploaded or taken from the cache) before the file
itself is rewritten and uploaded, so a rewritten reference always points at
a remote location that already exists.

Per-file state: not visited -> in progress on the current path -> resolved
(cached). The active path is an immutable tuple handed down each recursive
call; siblings never see each other as in progress, only their ancestors.
"""

import asyncio
import logging
from typing import Dict, List, Sequence, Tuple

from assetcdn.core.pipeline.context import RewriteContext
from assetcdn.core.processing.references import (
    find_references,
    mask_literals,
    reference_needles,
    replace_literals,
    strip_public_path,
)
from assetcdn.domain.errors import CircularReferenceError
from assetcdn.domain.models import FileRecord, UploadJob
from assetcdn.infra.fs import read_text, write_text

logger = logging.getLogger(__name__)

VisitPath = Tuple[str, ...]


class RewriteOrchestrator:
    """Drives the traversal, the upload queue and the dedup cache of one run."""

    def __init__(self, context: RewriteContext) -> None:
        self._ctx = context

    @property
    def context(self) -> RewriteContext:
        return self._ctx

    async def run(self, entries: Sequence[FileRecord]) -> List[str]:
        """
        Visit every entry document concurrently, each with a fresh path.

        Returns:
            List[str]: The entry file names, in input order.
        """
        logger.info(f"Rewriting references from {len(entries)} entry document(s)")
        return list(await asyncio.gather(*(self.visit(entry) for entry in entries)))

    async def visit(self, record: FileRecord, path: VisitPath = ()) -> str:
        """
        Resolve one file.

        Args:
            record: File to resolve.
            path: File names on the current root-to-node path.

        Returns:
            str: The remote location, or the file's own name for markup.

        Raises:
            CircularReferenceError: If the file is already on the current path.
        """
        cached = self._ctx.cache.get(record.file_name)
        if cached is not None:
            return cached

        if record.file_name in path:
            for name in path:
                logger.warning(f"Reference chain: {name}")
            logger.error(f"Circular reference closed by: {record.file_name}")
            raise CircularReferenceError(path, record.file_name)

        path = path + (record.file_name,)

        if record.is_rewritable:
            await self._rewrite(record, path)

        # Entry documents are rewritten in place, never uploaded
        if record.is_markup:
            return record.file_name

        return await self._request_upload(record)

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    async def _rewrite(self, record: FileRecord, path: VisitPath) -> None:
        """Resolve the references of a text file and rewrite them in place."""
        original = read_text(record.full_path)
        text = original

        if record.is_script:
            text = strip_public_path(self._ctx.base, text)

        # Locations written by an earlier visit of this file are not references
        known_locations = [location for _, location in self._ctx.cache]
        scan_text = mask_literals(text, known_locations)

        references = find_references(record, scan_text, self._ctx.files)
        if not references:
            return

        logger.debug(
            f"{record.rel_path} references {', '.join(r.file_name for r in references)}"
        )
        locations = await asyncio.gather(*(self.visit(ref, path) for ref in references))

        replacements: Dict[str, str] = {}
        for ref, location in zip(references, locations):
            for needle in reference_needles(self._ctx.base, ref, record.is_script):
                replacements.setdefault(needle, location)

        protected = [location for _, location in self._ctx.cache]
        text, count = replace_literals(text, replacements, protected)

        if count and text != original:
            write_text(record.full_path, text)
            logger.debug(f"Rewrote {count} reference(s) in {record.rel_path}")

    async def _request_upload(self, record: FileRecord) -> str:
        """Queue an upload job for the file and wait for its location."""
        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()

        async def callback() -> None:
            # Another requester may have finished this upload since enqueue
            try:
                location = self._ctx.cache.get(record.file_name)
                if location is None:
                    remote = await self._ctx.uploader.upload(record.full_path)
                    location = self._ctx.cache.set(record.file_name, remote)
                    self._ctx.uploaded_paths.append(record.full_path)
            except Exception as e:
                if not future.done():
                    future.set_exception(e)
                return

            if not future.done():
                future.set_result(location)

        self._ctx.queue.enqueue(UploadJob(file_name=record.file_name, callback=callback))
        return await future
