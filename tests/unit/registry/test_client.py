"""Tests for the release registry client."""

from __future__ import annotations

import base64
import json
from email.message import Message
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

import pytest

from platvm.config.models import RegistryConfig
from platvm.core.errors import ArchitectureUnsupported, NetworkError, ReleaseNotFound
from platvm.core.models import Artifact, Channel, StaticVersion
from platvm.registry.client import ReleaseClient

API = "https://api.github.com/repos/fluvio-community/fluvio"
TARGET = "x86_64-unknown-linux-musl"


def _release(tag: str, names: List[str], target: str = TARGET) -> Dict[str, Any]:
    return {
        "tag_name": tag,
        "assets": [
            {
                "name": f"{name}-{target}.zip",
                "browser_download_url": f"https://dl.example.com/{tag}/{name}-{target}.zip",
                "digest": f"sha256:{'a' * 64}",
            }
            for name in names
        ],
    }


def _response(body: bytes, content_type: Optional[str] = "application/json") -> MagicMock:
    response = MagicMock()
    response.__enter__.return_value = response
    response.read.return_value = body
    response.headers = {"Content-Type": content_type} if content_type else {}
    return response


def _http_error(url: str, code: int) -> HTTPError:
    return HTTPError(url, code, "error", Message(), None)


class FakeServer:
    """Answers urlopen calls from a URL -> payload map."""

    def __init__(self, routes: Dict[str, Any]) -> None:
        self.routes = routes
        self.requests: List[Any] = []

    def __call__(self, request: Any, timeout: int = 0) -> MagicMock:
        self.requests.append(request)
        url = request.full_url
        if url not in self.routes:
            raise _http_error(url, 404)
        payload = self.routes[url]
        if isinstance(payload, Exception):
            raise payload
        if isinstance(payload, bytes):
            return _response(payload, "application/octet-stream")
        return _response(json.dumps(payload).encode())


@pytest.fixture
def client() -> ReleaseClient:
    return ReleaseClient(RegistryConfig(), installable=["fluvio", "cdk"])


class TestFetchRelease:
    """Tests for channel and tag resolution."""

    def test_stable_uses_latest_release(self, client: ReleaseClient) -> None:
        server = FakeServer({f"{API}/releases/latest": _release("v0.11.0", ["fluvio"])})
        with patch("platvm.registry.client.urlopen", server):
            _, version = client.fetch_release(Channel("stable"))
        assert version == "0.11.0"

    def test_static_version_uses_v_tag(self, client: ReleaseClient) -> None:
        server = FakeServer({f"{API}/releases/tags/v0.10.15": _release("v0.10.15", ["fluvio"])})
        with patch("platvm.registry.client.urlopen", server):
            _, version = client.fetch_release(StaticVersion("0.10.15"))
        assert version == "0.10.15"

    def test_latest_reads_dev_version_file(self, client: ReleaseClient) -> None:
        content = base64.b64encode(b"0.11.1-dev.3\n").decode()
        server = FakeServer(
            {
                f"{API}/releases/tags/dev": _release("dev", ["fluvio"]),
                f"{API}/contents/VERSION?ref=dev": {"content": content},
            }
        )
        with patch("platvm.registry.client.urlopen", server):
            _, version = client.fetch_release(Channel("latest"))
        assert version == "0.11.1-dev.3"

    def test_named_channel_uses_its_tag(self, client: ReleaseClient) -> None:
        server = FakeServer({f"{API}/releases/tags/v0.10.x": {"tag_name": "v0.10.16"}})
        with patch("platvm.registry.client.urlopen", server):
            _, version = client.fetch_release(Channel("v0.10.x"))
        assert version == "0.10.16"

    def test_missing_release(self, client: ReleaseClient) -> None:
        with patch("platvm.registry.client.urlopen", FakeServer({})):
            with pytest.raises(ReleaseNotFound, match="Release not found for tag v9.9.9"):
                client.fetch_release(StaticVersion("9.9.9"))

    def test_non_semver_tag(self, client: ReleaseClient) -> None:
        server = FakeServer({f"{API}/releases/latest": {"tag_name": "nightly"}})
        with patch("platvm.registry.client.urlopen", server):
            with pytest.raises(NetworkError, match="not a semantic version"):
                client.fetch_release(Channel("stable"))

    def test_server_error_is_network_error(self, client: ReleaseClient) -> None:
        url = f"{API}/releases/latest"
        server = FakeServer({url: _http_error(url, 502)})
        with patch("platvm.registry.client.urlopen", server):
            with pytest.raises(NetworkError, match="HTTP 502"):
                client.fetch_release(Channel("stable"))

    def test_transport_error(self, client: ReleaseClient) -> None:
        url = f"{API}/releases/latest"
        server = FakeServer({url: URLError("Name or service not known")})
        with patch("platvm.registry.client.urlopen", server):
            with pytest.raises(NetworkError, match="Check your network connection"):
                client.fetch_release(Channel("stable"))

    def test_sends_token(self) -> None:
        client = ReleaseClient(RegistryConfig(token="secret"))
        server = FakeServer({f"{API}/releases/latest": {"tag_name": "v0.11.0"}})
        with patch("platvm.registry.client.urlopen", server):
            client.fetch_release(Channel("stable"))
        assert server.requests[0].get_header("Authorization") == "Bearer secret"


class TestFetchPackageSet:
    """Tests for target filtering of release assets."""

    def test_filters_by_target(self, client: ReleaseClient) -> None:
        release = _release("v0.11.0", ["fluvio", "cdk"])
        release["assets"] += _release("v0.11.0", ["fluvio"], "aarch64-apple-darwin")["assets"]
        server = FakeServer({f"{API}/releases/latest": release})
        with patch("platvm.registry.client.urlopen", server):
            descriptor = client.fetch_package_set(Channel("stable"), TARGET)

        assert descriptor.tag == "v0.11.0"
        assert descriptor.version == "0.11.0"
        assert [a.name for a in descriptor.artifacts] == ["fluvio", "cdk"]
        assert all(a.version == "0.11.0" for a in descriptor.artifacts)
        assert descriptor.artifact("cdk").sha256_digest == f"sha256:{'a' * 64}"

    def test_no_artifacts_for_target(self, client: ReleaseClient) -> None:
        server = FakeServer({f"{API}/releases/latest": _release("v0.11.0", ["fluvio"])})
        with patch("platvm.registry.client.urlopen", server):
            with pytest.raises(ArchitectureUnsupported) as exc_info:
                client.fetch_package_set(Channel("stable"), "armv7-unknown-linux-gnueabihf")
        assert str(exc_info.value) == (
            'Release "v0.11.0" does not have artifacts for architecture: '
            '"armv7-unknown-linux-gnueabihf"'
        )

    def test_default_set_keeps_installable_only(self, client: ReleaseClient) -> None:
        release = _release("v0.11.0", ["fluvio", "cdk", "fvm", "smdk"])
        server = FakeServer({f"{API}/releases/latest": release})
        with patch("platvm.registry.client.urlopen", server):
            descriptor = client.fetch_default_package_set(Channel("stable"), TARGET)
        assert sorted(a.name for a in descriptor.artifacts) == ["cdk", "fluvio"]


class TestDownload:
    def test_writes_verified_binary(self, client: ReleaseClient, tmp_path: Path) -> None:
        import hashlib

        payload = b"\x7fELF binary"
        artifact = Artifact(
            name="fluvio",
            version="0.11.0",
            download_url="https://dl.example.com/fluvio",
            sha256_digest="sha256:" + hashlib.sha256(payload).hexdigest(),
        )
        server = FakeServer({artifact.download_url: payload})
        with patch("platvm.registry.client.urlopen", server):
            out = client.download(artifact, tmp_path)

        assert out == tmp_path / "fluvio"
        assert out.read_bytes() == payload
        assert server.requests[0].get_header("Accept") == "application/octet-stream"

    def test_http_failure(self, client: ReleaseClient, tmp_path: Path) -> None:
        artifact = Artifact("fluvio", "0.11.0", "https://dl.example.com/fluvio")
        with patch("platvm.registry.client.urlopen", FakeServer({})):
            with pytest.raises(NetworkError, match="status code 404"):
                client.download(artifact, tmp_path)
        assert not (tmp_path / "fluvio").exists()
