from __future__ import annotations

"""
Integration tests for the CDN Upload Client.

Utilizes mocking to verify request construction, response decoding and
failure mapping without making real network calls.
"""

import asyncio
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from assetcdn.domain.errors import UploadFailure
from assetcdn.infra.network import (
    CdnUploadClient,
    UploadOptions,
    build_upload_client,
    pick_domain,
)

ENDPOINT = "https://upload.example.com/api"


def _response(payload) -> MagicMock:
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.json.return_value = payload
    return mock_response


@pytest.fixture
def asset(tmp_path: Path) -> Path:
    f = tmp_path / "app.1a2b.js"
    f.write_text("console.log(1)", encoding="utf-8")
    return f


def test_upload_returns_location_keyed_by_path(asset: Path) -> None:
    """TC-01: The location is read from the entry keyed by the local path."""
    client = CdnUploadClient(UploadOptions(endpoint=ENDPOINT, token="t0k"))
    url = "https://s1.ssl.qhimg.com/static/app.1a2b.js"

    with patch("requests.post", return_value=_response({str(asset): url})) as mock_post:
        result = client.upload_file(str(asset))

    assert result == url
    args, kwargs = mock_post.call_args
    assert args[0] == ENDPOINT
    assert kwargs["headers"]["Authorization"] == "Bearer t0k"
    assert kwargs["headers"]["User-Agent"].startswith("AssetCDN-Uploader/")
    assert kwargs["data"]["https"] == "1"
    assert "s0.ssl.qhimg.com" in kwargs["data"]["domains"]
    assert kwargs["files"]["file"][0] == "app.1a2b.js"


def test_upload_expands_bare_key(asset: Path) -> None:
    """TC-02: A bare key becomes a URL on a deterministic static domain."""
    options = UploadOptions(endpoint=ENDPOINT, static_domains=["s0.cdn.com", "s1.cdn.com"])
    client = CdnUploadClient(options)

    with patch("requests.post", return_value=_response({"url": "/t/abc.js"})):
        result = client.upload_file(str(asset))

    expected_domain = pick_domain("t/abc.js", ["s0.cdn.com", "s1.cdn.com"])
    assert result == f"https://{expected_domain}/t/abc.js"


def test_upload_uses_image_domains_and_http(tmp_path: Path) -> None:
    """TC-03: Images go to image domains; the https flag controls the scheme."""
    image = tmp_path / "logo.png"
    image.write_bytes(b"\x89PNG")
    options = UploadOptions(endpoint=ENDPOINT, https=False, image_domains=["img.cdn.com"])
    client = CdnUploadClient(options)

    with patch("requests.post", return_value=_response({"url": "k/logo.png"})) as mock_post:
        result = client.upload_file(str(image))

    assert result == "http://img.cdn.com/k/logo.png"
    assert mock_post.call_args.kwargs["data"]["https"] == "0"


def test_upload_transport_error_raises_upload_failure(asset: Path) -> None:
    """TC-04: Network errors are fatal UploadFailures."""
    client = CdnUploadClient(UploadOptions(endpoint=ENDPOINT))

    with patch("requests.post", side_effect=requests.exceptions.ConnectionError("down")):
        with pytest.raises(UploadFailure) as exc:
            client.upload_file(str(asset))

    assert exc.value.file_path == str(asset)


def test_upload_http_error_raises_upload_failure(asset: Path) -> None:
    """TC-05: Non-2xx responses are fatal UploadFailures."""
    mock_response = _response({})
    mock_response.raise_for_status.side_effect = requests.exceptions.HTTPError("500")
    client = CdnUploadClient(UploadOptions(endpoint=ENDPOINT))

    with patch("requests.post", return_value=mock_response):
        with pytest.raises(UploadFailure):
            client.upload_file(str(asset))


def test_upload_invalid_payload_raises_upload_failure(asset: Path) -> None:
    """TC-06: Missing location or undecodable body is an UploadFailure."""
    client = CdnUploadClient(UploadOptions(endpoint=ENDPOINT))

    with patch("requests.post", return_value=_response({"other": "x"})):
        with pytest.raises(UploadFailure):
            client.upload_file(str(asset))

    broken = _response(None)
    broken.json.side_effect = ValueError("not json")
    with patch("requests.post", return_value=broken):
        with pytest.raises(UploadFailure):
            client.upload_file(str(asset))


def test_async_upload_delegates_to_blocking_call(asset: Path) -> None:
    """TC-07: The awaitable facade returns the blocking call's result."""
    client = CdnUploadClient(UploadOptions(endpoint=ENDPOINT))

    with patch("requests.post", return_value=_response({"url": "https://cdn/x.js"})):
        result = asyncio.run(client.upload(str(asset)))

    assert result == "https://cdn/x.js"


def test_build_upload_client_from_config() -> None:
    """TC-08: Client options mirror the validated configuration."""
    client = build_upload_client({
        "upload_endpoint": ENDPOINT,
        "upload_token": "tk",
        "https": False,
        "image_domains": ["i.cdn"],
        "static_domains": ["s.cdn"],
        "upload_timeout": 5,
    })

    assert client.options.endpoint == ENDPOINT
    assert client.options.https is False
    assert client.options.static_domains == ["s.cdn"]
    assert client.options.timeout == 5


def test_pick_domain_is_stable() -> None:
    domains = ["a", "b", "c"]
    assert pick_domain("key/one.js", domains) == pick_domain("key/one.js", domains)
    assert pick_domain("anything", []) == ""
