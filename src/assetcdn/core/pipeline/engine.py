from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates a complete post-processing run:
1. Validates configuration and resolves the build output directory.
2. Discovers files and entry documents.
3. Rewrites references and uploads assets, leaf-most first.
4. Deletes the local copies of uploaded assets.

Any fatal failure aborts the run before cleanup; nothing is rolled back.
"""

import asyncio
import logging
import os
from typing import Any, Dict, Optional

from assetcdn.core.pipeline.cleanup import cleanup_uploaded
from assetcdn.core.pipeline.context import Uploader, create_context
from assetcdn.core.pipeline.orchestrator import RewriteOrchestrator
from assetcdn.core.pipeline.validator import validate_config
from assetcdn.core.services.scanner import (
    ensure_unique_names,
    find_entry_documents,
    list_files_recursively,
)
from assetcdn.domain.errors import AssetCdnError, ConfigurationError
from assetcdn.domain.models import (
    RewriteResult,
    create_error_result,
    create_success_result,
)
from assetcdn.infra.fs import normalize_path
from assetcdn.infra.network import build_upload_client

logger = logging.getLogger(__name__)


def run_pipeline(
        config: Optional[Dict[str, Any]],
        *,
        uploader: Optional[Uploader] = None,
) -> RewriteResult:
    """
    Execute the full rewrite-and-upload pipeline.

    Args:
        config: The configuration dictionary (raw or partial).
        uploader: Optional upload primitive; built from the config otherwise.

    Returns:
        RewriteResult: Object containing status, uploaded assets and summary.
    """
    logger.info("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    base = cfg["base"]
    output_dir = normalize_path(cfg["output_dir"], os.getcwd())

    if not os.path.isdir(output_dir):
        msg = f"Invalid output directory: {output_dir}"
        logger.error(msg)
        return create_error_result(msg, output_dir, base)

    try:
        if uploader is None:
            uploader = _build_uploader(cfg)

        # ---------------------------------------------------------------------
        # 2) Discovery
        # ---------------------------------------------------------------------
        files = list_files_recursively(output_dir, "")
        ensure_unique_names(files)
        entries = find_entry_documents(files)
        logger.info(f"Discovered {len(files)} file(s), {len(entries)} entry document(s) in {output_dir}")

        # ---------------------------------------------------------------------
        # 3) Rewrite & Upload
        # ---------------------------------------------------------------------
        context = create_context(base, output_dir, files, uploader, round_size=cfg["round_size"])
        orchestrator = RewriteOrchestrator(context)
        asyncio.run(orchestrator.run(entries))

        # ---------------------------------------------------------------------
        # 4) Cleanup
        # ---------------------------------------------------------------------
        deleted = cleanup_uploaded(context.uploaded_paths)

    except (AssetCdnError, OSError) as e:
        msg = f"Post-processing aborted: {e}"
        logger.critical(msg)
        return create_error_result(
            msg, output_dir, base,
            summary_extra={"error_type": type(e).__name__},
        )

    uploaded = context.cache.as_dict()
    summary = {
        "files": len(files),
        "entries": len(entries),
        "uploaded": len(context.uploaded_paths),
        "deleted": len(deleted),
        "rounds": context.queue.rounds,
    }

    logger.info("Pipeline completed successfully.")
    return create_success_result(
        output_dir,
        base,
        [e.rel_path for e in entries],
        uploaded,
        deleted,
        summary,
    )


def _build_uploader(cfg: Dict[str, Any]) -> Uploader:
    """Create the HTTP upload client, requiring a configured endpoint."""
    if not cfg.get("upload_endpoint"):
        raise ConfigurationError("No upload endpoint configured (set 'upload_endpoint' or --endpoint).")
    return build_upload_client(cfg)
