"""Version Registry: installed version directories and their manifests."""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from typing import List, Tuple

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import VersionNotInstalled
from platvm.core.logging import get_logger
from platvm.core.models import (
    Manifest,
    Selector,
    Settings,
    StaticVersion,
    parse_selector,
)
from platvm.store.manifest import ManifestStore

LOGGER = get_logger(__name__)


@dataclass
class InstalledVersion:
    """One row of ``platvm list``."""

    selector: Selector
    manifest: Manifest
    active: bool = False


def _sort_key(item: InstalledVersion) -> Tuple[int, Tuple[int, ...], str]:
    # Channels first (by name), then pinned versions, newest first.
    if isinstance(item.selector, StaticVersion):
        core = item.selector.version.split("-", 1)[0].split("+", 1)[0]
        numbers = tuple(-int(part) for part in core.split("."))
        return (1, numbers, item.selector.version)
    return (0, (), item.selector.name)


@dataclass
class VersionRegistry:
    """Enumerates ``versions/`` and correlates entries with the settings."""

    paths: PlatvmPaths
    manifests: ManifestStore

    def is_installed(self, selector: Selector) -> bool:
        return self.paths.manifest_file(selector).exists()

    def get(self, selector: Selector) -> Manifest:
        """Load the manifest of an installed selector.

        Raises:
            VersionNotInstalled: If there is no manifest for ``selector``.
        """
        manifest = self.manifests.load(selector)
        if manifest is None:
            raise VersionNotInstalled(str(selector))
        return manifest

    def installed(self, settings: Settings) -> List[InstalledVersion]:
        """List installed versions, marking the one matching the settings.

        A channel and a static version resolving to the same number are
        distinct entries; only an exact selector match is active.
        """
        versions_dir = self.paths.versions_dir
        if not versions_dir.is_dir():
            return []

        items: List[InstalledVersion] = []
        for entry in versions_dir.iterdir():
            # Dot-directories are staging areas of in-flight installs.
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            try:
                selector = parse_selector(entry.name)
            except ValueError:
                LOGGER.warning(f"Skipping {entry}: not a valid selector name")
                continue
            manifest = self.manifests.load(selector)
            if manifest is None:
                LOGGER.warning(f"Skipping {entry}: no manifest found")
                continue
            items.append(
                InstalledVersion(
                    selector=selector,
                    manifest=manifest,
                    active=settings.channel == selector,
                )
            )
        return sorted(items, key=_sort_key)

    def remove(self, selector: Selector) -> None:
        """Delete a version directory wholesale.

        Raises:
            VersionNotInstalled: If the directory does not exist.
        """
        version_dir = self.paths.version_dir(selector)
        if not version_dir.is_dir():
            raise VersionNotInstalled(str(selector))
        shutil.rmtree(version_dir)
        LOGGER.info(f"Removed {version_dir}")
