from __future__ import annotations

"""
Network Communication Infrastructure.

Facade over the upload service client.
"""

from assetcdn.infra.network.common import pick_domain
from assetcdn.infra.network.upload_client import (
    CdnUploadClient,
    UploadOptions,
    build_upload_client,
)

__all__ = [
    "CdnUploadClient",
    "UploadOptions",
    "build_upload_client",
    "pick_domain",
]
