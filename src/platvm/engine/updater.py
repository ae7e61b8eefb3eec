"""Updater: moves an installed channel to the release it now points at."""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import NoSelectorProvided
from platvm.core.logging import get_logger
from platvm.core.models import ArtifactEntry, Manifest, Selector, StaticVersion
from platvm.engine.installer import commit_directory, staging_dir
from platvm.engine.resolver import Resolver
from platvm.engine.switcher import Switcher
from platvm.engine.versions import VersionRegistry
from platvm.store.manifest import MANIFEST_FILE_NAME, write_manifest
from platvm.store.settings import SettingsStore

LOGGER = get_logger(__name__)


class UpdateStatus(str, Enum):
    """How an update attempt ended. All of these are successes."""

    STATIC_VERSION = "static_version"
    UP_TO_DATE = "up_to_date"
    UPDATED = "updated"


@dataclass(frozen=True)
class ArtifactChange:
    """One binary replaced, added or dropped by an update."""

    name: str
    old_version: Optional[str]
    new_version: Optional[str]


@dataclass
class UpdateResult:
    status: UpdateStatus
    selector: Selector
    old_version: Optional[str] = None
    new_version: Optional[str] = None
    changes: List[ArtifactChange] = field(default_factory=list)
    switched: bool = False


def diff_artifacts(
    old: Manifest, new_entries: List[ArtifactEntry]
) -> Tuple[Set[Tuple[str, str]], Set[str]]:
    """Compare installed and remote artifacts.

    Returns:
        ``(changed, removed)``: ``(name, version)`` pairs absent from the old
        manifest, and names the new release no longer ships.
    """
    old_pairs = {(e.name, e.version) for e in old.contents}
    new_pairs = {(e.name, e.version) for e in new_entries}
    new_names = {e.name for e in new_entries}
    changed = new_pairs - old_pairs
    removed = {e.name for e in old.contents} - new_names
    return changed, removed


@dataclass
class Updater:
    """Artifact-level updates of channel selectors.

    Static versions are immutable pins and are never updated. Changed
    artifacts are downloaded into a staging directory next to copies of the
    unchanged ones and the new manifest, which then replaces the version
    directory in one rename. A failed download or rename leaves the
    installed version as it was.
    """

    paths: PlatvmPaths
    resolver: Resolver
    registry: VersionRegistry
    settings: SettingsStore
    switcher: Switcher

    def update(self, selector: Optional[Selector] = None) -> UpdateResult:
        """Update ``selector`` (default: the active one).

        Raises:
            NoSelectorProvided: If nothing is given and nothing is active.
            VersionNotInstalled: If the channel is not installed.
        """
        active = self.settings.load().channel
        if selector is None:
            selector = active
        if selector is None:
            raise NoSelectorProvided()

        if isinstance(selector, StaticVersion):
            return UpdateResult(UpdateStatus.STATIC_VERSION, selector)

        current = self.registry.get(selector)
        descriptor = self.resolver.resolve(selector)
        if descriptor.version == current.version:
            return UpdateResult(
                UpdateStatus.UP_TO_DATE,
                selector,
                old_version=current.version,
                new_version=current.version,
            )

        new_entries = [ArtifactEntry(a.name, a.version) for a in descriptor.artifacts]
        changed, removed = diff_artifacts(current, new_entries)
        to_download = [a for a in descriptor.artifacts if (a.name, a.version) in changed]
        version_dir = self.paths.version_dir(selector)

        manifest = Manifest(channel=selector, version=descriptor.version, contents=new_entries)
        stage = staging_dir(self.paths, str(selector))
        try:
            for artifact in to_download:
                self.resolver.client.download(artifact, stage)
            # Unchanged binaries are carried over so the whole directory swaps at once.
            downloaded = {a.name for a in to_download}
            for entry in new_entries:
                if entry.name not in downloaded:
                    shutil.copy2(version_dir / entry.name, stage / entry.name)
            write_manifest(stage / MANIFEST_FILE_NAME, manifest)
            commit_directory(stage, version_dir)
        finally:
            if stage.exists():
                shutil.rmtree(stage, ignore_errors=True)

        changes = []
        for artifact in to_download:
            previous = current.entry(artifact.name)
            changes.append(
                ArtifactChange(
                    artifact.name,
                    previous.version if previous else None,
                    artifact.version,
                )
            )
        for name in sorted(removed):
            previous = current.entry(name)
            changes.append(ArtifactChange(name, previous.version if previous else None, None))

        result = UpdateResult(
            UpdateStatus.UPDATED,
            selector,
            old_version=current.version,
            new_version=descriptor.version,
            changes=changes,
        )

        if active == selector:
            self.switcher.switch(selector)
            result.switched = True

        LOGGER.info(f"Updated {selector} from {current.version} to {descriptor.version}")
        return result
