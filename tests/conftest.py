"""Shared fixtures: isolated platvm home and an in-memory release registry."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from platvm.bootstrap.paths import PlatvmPaths
from platvm.cli.context import AppContext
from platvm.config.models import PlatformConfig, PlatvmConfig, RegistryConfig
from platvm.core.errors import ArchitectureUnsupported, NetworkError, ReleaseNotFound
from platvm.core.models import (
    Artifact,
    Channel,
    ReleaseDescriptor,
    Selector,
    StaticVersion,
)
from platvm.registry.client import ReleaseClient
from platvm.registry.download import set_executable_mode

TARGET = "x86_64-unknown-linux-musl"
BINARIES = ["fluvio", "fluvio-run", "cdk", "smdk"]


class FakeReleaseClient(ReleaseClient):
    """Release client backed by a dict instead of HTTP.

    Releases are keyed by the selector string (``stable``, ``0.10.15``).
    Each maps to ``(version, {artifact: artifact_version})`` for TARGET.
    """

    def __init__(self) -> None:
        super().__init__(RegistryConfig(), installable=BINARIES)
        self.releases: Dict[str, Tuple[str, Dict[str, str]]] = {}
        self.metadata_calls: List[str] = []
        self.downloads: List[Tuple[str, str]] = []
        self.fail_download: Optional[str] = None

    def publish(self, key: str, version: str, artifacts: Optional[Dict[str, str]] = None) -> None:
        if artifacts is None:
            artifacts = {name: version for name in BINARIES}
        self.releases[key] = (version, artifacts)

    def _tag(self, selector: Selector) -> str:
        if isinstance(selector, StaticVersion):
            return selector.tag
        return selector.name

    def fetch_release(self, selector: Selector):
        self.metadata_calls.append(str(selector))
        if str(selector) not in self.releases:
            raise ReleaseNotFound(self._tag(selector))
        version, _ = self.releases[str(selector)]
        return {"tag_name": f"v{version}"}, version

    def fetch_package_set(self, selector: Selector, target: str) -> ReleaseDescriptor:
        self.fetch_release(selector)
        version, artifacts = self.releases[str(selector)]
        tag = self._tag(selector)
        if target != TARGET:
            raise ArchitectureUnsupported(tag, target)
        return ReleaseDescriptor(
            tag=tag,
            version=version,
            target=target,
            artifacts=[
                Artifact(
                    name=name,
                    version=artifact_version,
                    download_url=f"https://example.com/{tag}/{name}-{target}.zip",
                    sha256_digest="sha256:" + "0" * 64,
                )
                for name, artifact_version in artifacts.items()
            ],
        )

    def download(self, artifact: Artifact, target_dir: Path) -> Path:
        if self.fail_download == artifact.name:
            raise NetworkError(artifact.download_url, "connection reset")
        self.downloads.append((artifact.name, artifact.version))
        out_path = target_dir / artifact.name
        out_path.write_bytes(f"{artifact.name}-{artifact.version}".encode())
        set_executable_mode(out_path)
        return out_path


@pytest.fixture
def paths(tmp_path: Path) -> PlatvmPaths:
    """Isolated platvm home and platform home."""
    return PlatvmPaths(home=tmp_path / ".platvm", platform_home=tmp_path / ".platform")


@pytest.fixture
def fake_client() -> FakeReleaseClient:
    client = FakeReleaseClient()
    client.publish("stable", "0.11.0")
    client.publish("0.10.15", "0.10.15")
    return client


@pytest.fixture
def context(paths: PlatvmPaths, fake_client: FakeReleaseClient) -> AppContext:
    config = PlatvmConfig(
        home=paths.home,
        platform=PlatformConfig(home=paths.platform_home, binaries=list(BINARIES)),
    )
    paths.ensure_directories()
    return AppContext(config=config, paths=paths, client=fake_client, target_override=TARGET)


@pytest.fixture
def stable() -> Channel:
    return Channel("stable")


@pytest.fixture
def failing_commit_rename():
    """Build an ``os.replace`` stand-in that fails when a staging directory
    is renamed onto ``final_dir``; every other rename goes through."""
    real_replace = os.replace

    def factory(final_dir: Path):
        def replace(src, dst):
            if Path(dst) == final_dir and Path(src).name.startswith(".staging-"):
                raise OSError("No space left on device")
            return real_replace(src, dst)

        return replace

    return factory
