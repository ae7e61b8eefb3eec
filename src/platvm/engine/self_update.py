"""Self-Updater: replaces the installed platvm executable in place."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from platvm import __version__ as PLATVM_VERSION
from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import IntegrityError, PlatvmError
from platvm.core.logging import get_logger
from platvm.core.models import STABLE_CHANNEL, Artifact, Channel, StaticVersion, parse_semver
from platvm.registry.client import ReleaseClient

LOGGER = get_logger(__name__)


class SelfUpdateStatus(str, Enum):
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"


@dataclass
class SelfUpdateResult:
    status: SelfUpdateStatus
    current_version: str
    target_version: str
    path: Optional[Path] = None


@dataclass
class SelfUpdater:
    """Downloads a new manager build and renames it over the installed one.

    Never reads or writes the settings file.
    """

    paths: PlatvmPaths
    client: ReleaseClient
    target: str
    artifact_name: str
    override_version: Optional[str] = None
    current_version: str = PLATVM_VERSION

    def resolve_version(self) -> str:
        """Pick the release to update to.

        The override (``PLATVM_UPDATE_VERSION``) wins; otherwise the latest
        stable release.
        """
        if self.override_version:
            version = parse_semver(self.override_version)
            if version is None:
                raise PlatvmError(
                    f"Invalid update version: {self.override_version!r}",
                    hint="Use a semantic version such as 0.11.0",
                )
            return version
        _, version = self.client.fetch_release(Channel(STABLE_CHANNEL))
        return version

    def update(self) -> SelfUpdateResult:
        version = self.resolve_version()
        if version == self.current_version:
            return SelfUpdateResult(SelfUpdateStatus.UP_TO_DATE, self.current_version, version)

        artifact = self._find_artifact(version)
        installed = self.paths.executable
        installed.parent.mkdir(parents=True, exist_ok=True)

        # Staged next to the destination so the final rename stays on one filesystem.
        with tempfile.TemporaryDirectory(prefix=".self-update-", dir=installed.parent) as tmp:
            downloaded = self.client.download(artifact, Path(tmp))
            if not downloaded.is_file():
                raise PlatvmError("Failed to update platvm due to missing binary")
            os.replace(downloaded, installed)

        LOGGER.info(f"Replaced {installed} with {artifact.name}@{version}")
        return SelfUpdateResult(SelfUpdateStatus.UPDATED, self.current_version, version, installed)

    def _find_artifact(self, version: str) -> Artifact:
        descriptor = self.client.fetch_package_set(StaticVersion(version), self.target)
        artifact = descriptor.artifact(self.artifact_name) or descriptor.artifact(
            f"{self.artifact_name}.exe"
        )
        if artifact is None:
            raise PlatvmError(
                f"{self.artifact_name} artifact not found in release {descriptor.tag} "
                f"for {self.target}"
            )
        if not artifact.sha256_digest:
            raise IntegrityError(
                f"Integrity verification unavailable for {artifact.name} "
                f"(missing sha256 digest) in release {descriptor.tag}"
            )
        return artifact
