"""HTTP client for the release registry.

The registry speaks the GitHub releases API: releases are addressed by
tag, and each release lists assets named ``<artifact>-<target>.zip``.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from platvm import __version__ as PLATVM_VERSION
from platvm.config.models import RegistryConfig
from platvm.core.errors import ArchitectureUnsupported, NetworkError, ReleaseNotFound
from platvm.core.logging import get_logger
from platvm.core.models import (
    LATEST_CHANNEL,
    STABLE_CHANNEL,
    Artifact,
    Channel,
    ReleaseDescriptor,
    Selector,
    StaticVersion,
    parse_semver,
)
from platvm.registry.download import process_downloaded_bytes

LOGGER = get_logger(__name__)

# Tag carrying the rolling development build behind the "latest" channel
DEV_TAG = "dev"

# File holding the version number of the development build
VERSION_FILE = "VERSION"


@dataclass
class HttpResponse:
    """Body and selected headers of a successful GET."""

    body: bytes
    content_type: Optional[str] = None


def http_get(url: str, headers: Dict[str, str], timeout: int) -> HttpResponse:
    """Perform a blocking GET.

    Proxies from HTTP(S)_PROXY / ALL_PROXY are honoured by urllib.

    Raises:
        HTTPError: For non-2xx responses (callers map 404 themselves).
        NetworkError: For transport failures.
    """
    request = Request(url, headers=headers)
    try:
        with urlopen(request, timeout=timeout) as response:  # nosec B310
            content_type = response.headers.get("Content-Type")
            return HttpResponse(body=response.read(), content_type=content_type)
    except HTTPError:
        raise
    except URLError as e:
        raise NetworkError(url, f"{e.reason}. Check your network connection.") from e
    except OSError as e:
        raise NetworkError(url, str(e)) from e


@dataclass
class ReleaseClient:
    """Fetches release metadata and artifacts from the registry.

    Stateless apart from its configuration; every call goes to the network.
    """

    registry: RegistryConfig
    installable: Sequence[str] = field(default_factory=list)
    timeout: int = 300

    def _headers(self, accept: str = "application/vnd.github+json") -> Dict[str, str]:
        headers = {
            "Accept": accept,
            "User-Agent": f"platvm/{PLATVM_VERSION}",
        }
        if self.registry.token:
            headers["Authorization"] = f"Bearer {self.registry.token}"
        return headers

    def _repo_url(self, path: str) -> str:
        return f"{self.registry.api_url}/repos/{self.registry.repository}/{path}"

    def _get_json(self, url: str, tag: str) -> Any:
        LOGGER.debug(f"GET {url}")
        try:
            response = http_get(url, self._headers(), self.timeout)
        except HTTPError as e:
            if e.code == 404:
                raise ReleaseNotFound(tag) from e
            raise NetworkError(url, f"HTTP {e.code} - {e.reason}") from e
        try:
            return json.loads(response.body)
        except ValueError as e:
            raise NetworkError(url, f"invalid JSON response: {e}") from e

    def _release_by_tag(self, tag: str) -> Dict[str, Any]:
        return self._get_json(self._repo_url(f"releases/tags/{quote(tag, safe='')}"), tag)

    def _latest_release(self) -> Dict[str, Any]:
        return self._get_json(self._repo_url("releases/latest"), STABLE_CHANNEL)

    def _dev_version(self, ref: str) -> str:
        url = self._repo_url(f"contents/{VERSION_FILE}?ref={quote(ref, safe='')}")
        data = self._get_json(url, ref)
        content = data.get("content") if isinstance(data, dict) else None
        if not content:
            raise NetworkError(url, f"{VERSION_FILE} file for {ref} release is missing or empty")
        text = base64.b64decode(content).decode("utf-8").strip()
        version = parse_semver(text)
        if version is None:
            raise NetworkError(url, f"invalid version string in {VERSION_FILE}: {text!r}")
        return version

    def fetch_release(self, selector: Selector) -> Tuple[Dict[str, Any], str]:
        """Resolve a selector to the registry release and its version.

        Channel semantics:
        - ``stable``: latest non-prerelease release
        - ``latest``: the ``dev`` release, versioned by its VERSION file
        - other channel names: the release tagged with that name
        - static versions: the release tagged ``v<version>``

        Raises:
            ReleaseNotFound: If the registry has no release for the tag.
            NetworkError: On transport failures or malformed responses.
        """
        if isinstance(selector, StaticVersion):
            return self._release_by_tag(selector.tag), selector.version

        if selector.name == STABLE_CHANNEL:
            release = self._latest_release()
        elif selector.name == LATEST_CHANNEL:
            release = self._release_by_tag(DEV_TAG)
            return release, self._dev_version(release.get("tag_name", DEV_TAG))
        else:
            release = self._release_by_tag(selector.name)

        tag = release.get("tag_name", "")
        version = parse_semver(tag)
        if version is None:
            raise NetworkError(
                self._repo_url("releases"),
                f"release tag {tag!r} is not a semantic version",
            )
        return release, version

    def fetch_package_set(self, selector: Selector, target: str) -> ReleaseDescriptor:
        """Fetch every artifact of the selected release built for ``target``.

        Raises:
            ArchitectureUnsupported: If no asset matches the target.
        """
        release, version = self.fetch_release(selector)
        tag = release.get("tag_name", str(selector))
        suffix = f"-{target}.zip"

        artifacts: List[Artifact] = []
        for asset in release.get("assets", []):
            name = asset.get("name", "")
            if not name.endswith(suffix):
                continue
            artifacts.append(
                Artifact(
                    name=name[: -len(suffix)],
                    version=version,
                    download_url=asset["browser_download_url"],
                    sha256_digest=asset.get("digest"),
                )
            )

        if not artifacts:
            raise ArchitectureUnsupported(tag, target)

        LOGGER.debug(f"Release {tag} has {len(artifacts)} artifact(s) for {target}")
        return ReleaseDescriptor(tag=tag, version=version, target=target, artifacts=artifacts)

    def fetch_default_package_set(self, selector: Selector, target: str) -> ReleaseDescriptor:
        """Fetch the installable platform binaries of a release."""
        descriptor = self.fetch_package_set(selector, target)
        wanted = set(self.installable) | {f"{name}.exe" for name in self.installable}
        descriptor.artifacts = [a for a in descriptor.artifacts if a.name in wanted]
        if not descriptor.artifacts:
            raise ArchitectureUnsupported(descriptor.tag, target)
        return descriptor

    def download(self, artifact: Artifact, target_dir: Path) -> Path:
        """Download one artifact into ``target_dir``.

        Returns:
            Path of the written (extracted if zipped) binary.

        Raises:
            NetworkError: If the download fails.
            IntegrityError: If the payload fails verification.
        """
        LOGGER.info(f"Downloading {artifact.name}@{artifact.version}")
        try:
            response = http_get(
                artifact.download_url,
                self._headers(accept="application/octet-stream"),
                self.timeout,
            )
        except HTTPError as e:
            raise NetworkError(
                artifact.download_url,
                f"Server responded with status code {e.code}",
            ) from e
        return process_downloaded_bytes(
            response.body, response.content_type, artifact, target_dir
        )
