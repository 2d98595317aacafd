from __future__ import annotations

"""
Upload Deduplication Cache.

Maps an asset's base name to the remote location it was published under.
Entries are write-once: the first resolution wins and later writers get
the stored value back. Lives for a single run only.
"""

import logging
from typing import Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class UploadCache:
    """In-memory, write-once mapping of file name to remote location."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def get(self, file_name: str) -> Optional[str]:
        return self._entries.get(file_name)

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._entries.items())

    def set(self, file_name: str, location: str) -> str:
        """
        Record a resolved location unless one already exists.

        Returns:
            str: The location stored for the file (the first one written).
        """
        existing = self._entries.get(file_name)
        if existing is not None:
            if existing != location:
                logger.warning(
                    f"Ignoring second location for {file_name}: keeping {existing}, got {location}"
                )
            return existing

        self._entries[file_name] = location
        return location

    def as_dict(self) -> Dict[str, str]:
        return dict(self._entries)
