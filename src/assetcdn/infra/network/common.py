from __future__ import annotations

import hashlib
from typing import Sequence

from assetcdn.domain.constants import CURRENT_CONFIG_VERSION

USER_AGENT = f"AssetCDN-Uploader/{CURRENT_CONFIG_VERSION}"
DEFAULT_TIMEOUT = 30


def pick_domain(key: str, domains: Sequence[str]) -> str:
    """Select a domain for a key deterministically (same key, same domain)."""
    if not domains:
        return ""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return domains[digest[0] % len(domains)]
