from __future__ import annotations

"""
CDN Upload Client.

Sends one local file per request to the upload service and resolves the
remote location it was published under. Any failure is reported as
UploadFailure; retrying is left to whoever re-runs the build.
"""

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from assetcdn.domain.constants import (
    DEFAULT_IMAGE_DOMAINS,
    DEFAULT_STATIC_DOMAINS,
    IMAGE_EXTENSIONS,
)
from assetcdn.domain.errors import UploadFailure
from assetcdn.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT, pick_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadOptions:
    """
    Connection settings for the upload service.

    Attributes:
        endpoint: URL receiving multipart uploads.
        token: Optional bearer token.
        https: Build https:// URLs for bare keys (http:// otherwise).
        image_domains: Candidate hosts for image assets.
        static_domains: Candidate hosts for every other asset.
        timeout: Per-request timeout in seconds.
    """
    endpoint: str
    token: str = ""
    https: bool = True
    image_domains: List[str] = field(default_factory=lambda: list(DEFAULT_IMAGE_DOMAINS))
    static_domains: List[str] = field(default_factory=lambda: list(DEFAULT_STATIC_DOMAINS))
    timeout: int = DEFAULT_TIMEOUT


class CdnUploadClient:
    """Blocking HTTP uploader with an awaitable facade for the rewrite engine."""

    def __init__(self, options: UploadOptions) -> None:
        self._options = options

    @property
    def options(self) -> UploadOptions:
        return self._options

    async def upload(self, file_path: str) -> str:
        """Upload without blocking the event loop."""
        return await asyncio.to_thread(self.upload_file, file_path)

    def upload_file(self, file_path: str) -> str:
        """
        Upload a file and return its remote location.

        Args:
            file_path: Absolute local path.

        Returns:
            str: Fully-qualified remote URL.

        Raises:
            UploadFailure: On transport errors, bad status or bad payload.
        """
        domains = self._domains_for(file_path)
        headers = {"User-Agent": USER_AGENT}
        if self._options.token:
            headers["Authorization"] = f"Bearer {self._options.token}"

        data = {
            "https": "1" if self._options.https else "0",
            "domains": ",".join(domains),
        }

        logger.debug(f"Uploading {file_path} to {self._options.endpoint}")
        try:
            with open(file_path, "rb") as fh:
                response = requests.post(
                    self._options.endpoint,
                    headers=headers,
                    data=data,
                    files={"file": (os.path.basename(file_path), fh)},
                    timeout=self._options.timeout,
                )
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.RequestException as e:
            raise UploadFailure(file_path, f"upload service communication failure: {e}") from e
        except ValueError as e:
            raise UploadFailure(file_path, f"upload service returned invalid JSON: {e}") from e

        location = self._extract_location(file_path, payload)
        url = self._qualify(location, domains)
        logger.info(f"Uploaded {os.path.basename(file_path)} -> {url}")
        return url

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _domains_for(self, file_path: str) -> List[str]:
        ext = os.path.splitext(file_path)[1].lower()
        if ext in IMAGE_EXTENSIONS:
            return list(self._options.image_domains)
        return list(self._options.static_domains)

    @staticmethod
    def _extract_location(file_path: str, payload: Any) -> str:
        """Read the remote location keyed by local path, or the 'url' field."""
        if not isinstance(payload, dict):
            raise UploadFailure(file_path, "upload service returned a non-object payload")

        value: Optional[Any] = payload.get(file_path)
        if value is None:
            value = payload.get("url")
        if not isinstance(value, str) or not value.strip():
            raise UploadFailure(file_path, "upload service response has no location for this file")
        return value.strip()

    def _qualify(self, location: str, domains: List[str]) -> str:
        """Expand a bare key into a full URL on one of the candidate domains."""
        if "://" in location or location.startswith("//"):
            return location

        key = location.lstrip("/")
        domain = pick_domain(key, domains)
        if not domain:
            return location
        scheme = "https" if self._options.https else "http"
        return f"{scheme}://{domain}/{key}"


def build_upload_client(config: Dict[str, Any]) -> CdnUploadClient:
    """Create an upload client from a validated configuration dictionary."""
    options = UploadOptions(
        endpoint=config["upload_endpoint"],
        token=config.get("upload_token", ""),
        https=bool(config.get("https", True)),
        image_domains=list(config.get("image_domains") or DEFAULT_IMAGE_DOMAINS),
        static_domains=list(config.get("static_domains") or DEFAULT_STATIC_DOMAINS),
        timeout=int(config.get("upload_timeout") or DEFAULT_TIMEOUT),
    )
    return CdnUploadClient(options)
