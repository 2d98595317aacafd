from __future__ import annotations

"""
Build Output Discovery Service.

Walks the build output directory and produces the flat list of
FileRecords the reference graph operates on.
"""

import logging
import os
from typing import Dict, List

from assetcdn.domain.constants import EXCLUDED_EXTENSIONS
from assetcdn.domain.errors import DuplicateAssetNameError
from assetcdn.domain.models import FileRecord

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def list_files_recursively(directory: str, prefix: str = "") -> List[FileRecord]:
    """
    Walk a directory depth-first and return every graph-participating file.

    '.txt' and '.map' files are skipped. Sub-directories extend the prefix with
    '<name>/'. Order follows the directory listing and is not sorted.

    Args:
        directory: Directory to walk.
        prefix: Relative prefix of `directory` from the build root.

    Returns:
        List[FileRecord]: Flat list of discovered files.
    """
    records: List[FileRecord] = []

    for entry_name in os.listdir(directory):
        complete_path = os.path.join(directory, entry_name)

        if os.path.isfile(complete_path):
            if entry_name.endswith(EXCLUDED_EXTENSIONS):
                continue
            records.append(FileRecord(
                file_name=entry_name,
                full_path=complete_path,
                prefix=prefix,
            ))
        elif os.path.isdir(complete_path):
            records.extend(list_files_recursively(complete_path, f"{prefix}{entry_name}/"))

    return records


def ensure_unique_names(files: List[FileRecord]) -> None:
    """
    Fail fast when two graph-participating files share a base name.

    Markup documents are skipped: they are traversal roots only, never
    reference targets nor cache keys, so nested pages may share a name.

    Raises:
        DuplicateAssetNameError: On the first collision found.
    """
    seen: Dict[str, List[str]] = {}
    for record in files:
        if record.is_markup:
            continue
        seen.setdefault(record.file_name, []).append(record.rel_path)

    for file_name, paths in seen.items():
        if len(paths) > 1:
            logger.error(f"Asset name collision for '{file_name}': {paths}")
            raise DuplicateAssetNameError(file_name, paths)


def find_entry_documents(files: List[FileRecord]) -> List[FileRecord]:
    """Return the markup files that serve as traversal roots."""
    return [f for f in files if f.is_markup]
