"""Installer: materializes a verified, manifest-backed version directory."""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.logging import get_logger
from platvm.core.models import ArtifactEntry, Manifest, Selector, StaticVersion
from platvm.engine.resolver import Resolver
from platvm.store.manifest import MANIFEST_FILE_NAME, ManifestStore, write_manifest

LOGGER = get_logger(__name__)


@dataclass
class InstallResult:
    """Outcome of an install."""

    selector: Selector
    manifest: Manifest
    path: Path
    already_installed: bool = False


def staging_dir(paths: PlatvmPaths, label: str) -> Path:
    """Create a private staging directory on the same filesystem as ``versions/``."""
    paths.versions_dir.mkdir(parents=True, exist_ok=True)
    return Path(tempfile.mkdtemp(prefix=f".staging-{label}-", dir=paths.versions_dir))


@dataclass
class Installer:
    """Downloads every artifact of a release, then commits them in one rename.

    Installing never touches the settings: it does not change which
    version is active.
    """

    paths: PlatvmPaths
    resolver: Resolver
    manifests: ManifestStore

    def _existing(self, selector: Selector) -> Optional[Manifest]:
        manifest = self.manifests.load(selector)
        if manifest is None:
            return None
        if isinstance(selector, StaticVersion) and manifest.version != selector.version:
            LOGGER.warning(
                f"Manifest for {selector} records {manifest.version}; reinstalling"
            )
            return None
        return manifest

    def install(self, selector: Selector) -> InstallResult:
        """Install ``selector`` unless it is already present.

        An installed channel is left as is without contacting the registry;
        refreshing a channel is the updater's job.

        Raises:
            ReleaseNotFound, ArchitectureUnsupported: From resolution.
            NetworkError, IntegrityError: From downloads; nothing is
                committed in that case.
        """
        final_dir = self.paths.version_dir(selector)
        existing = self._existing(selector)
        if existing is not None:
            LOGGER.info(f"{selector} already installed ({existing.version})")
            return InstallResult(selector, existing, final_dir, already_installed=True)

        descriptor = self.resolver.resolve(selector)
        stage = staging_dir(self.paths, str(selector))
        try:
            for artifact in descriptor.artifacts:
                self.resolver.client.download(artifact, stage)

            manifest = Manifest(
                channel=selector,
                version=descriptor.version,
                contents=[ArtifactEntry(a.name, a.version) for a in descriptor.artifacts],
            )
            write_manifest(stage / MANIFEST_FILE_NAME, manifest)
            commit_directory(stage, final_dir)
        finally:
            if stage.exists():
                shutil.rmtree(stage, ignore_errors=True)

        LOGGER.info(f"Installed {selector} ({manifest.version}) into {final_dir}")
        return InstallResult(selector, manifest, final_dir)


def commit_directory(stage: Path, final_dir: Path) -> None:
    """Move a staged directory into place.

    A previous directory is moved aside first and only deleted once the
    new one is in place. If the final rename fails, it is moved back.
    """
    if not final_dir.exists():
        os.replace(stage, final_dir)
        return

    backup = Path(tempfile.mkdtemp(prefix=f".old-{final_dir.name}-", dir=final_dir.parent))
    backup.rmdir()
    os.replace(final_dir, backup)
    try:
        os.replace(stage, final_dir)
    except OSError:
        os.replace(backup, final_dir)
        raise
    shutil.rmtree(backup, ignore_errors=True)
