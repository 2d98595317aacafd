from __future__ import annotations

"""
Post-Upload Cleanup.

Removes the local copies of uploaded assets once every traversal has
finished. Entry documents are never in the list and stay on disk.
"""

import logging
from typing import Iterable, List

from assetcdn.infra.fs import delete_file

logger = logging.getLogger(__name__)


def cleanup_uploaded(paths: Iterable[str]) -> List[str]:
    """
    Delete every uploaded local file.

    Args:
        paths: Local paths recorded during the run.

    Returns:
        List[str]: Paths that were deleted, in order.
    """
    deleted: List[str] = []
    for path in dict.fromkeys(paths):
        delete_file(path)
        deleted.append(path)
        logger.debug(f"Deleted local copy: {path}")

    logger.info(f"Removed {len(deleted)} uploaded file(s) from the build output")
    return deleted
