"""Switcher: exposes an installed version through the shared binaries directory."""

from __future__ import annotations

from dataclasses import dataclass

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import PlatvmError
from platvm.core.logging import get_logger
from platvm.core.models import Manifest, Selector, Settings
from platvm.engine.versions import VersionRegistry
from platvm.store.files import atomic_copy
from platvm.store.settings import SettingsStore

LOGGER = get_logger(__name__)


@dataclass
class Switcher:
    """Copies a version's binaries into place, then records it as active.

    The settings are written last, so a failed copy leaves the previous
    selector recorded. Partially copied binaries are not rolled back.
    """

    paths: PlatvmPaths
    registry: VersionRegistry
    settings: SettingsStore

    def switch(self, selector: Selector) -> Manifest:
        """Make ``selector`` the active version.

        Raises:
            VersionNotInstalled: If ``selector`` has no version directory.
        """
        manifest = self.registry.get(selector)
        version_dir = self.paths.version_dir(selector)

        missing = [e.name for e in manifest.contents if not (version_dir / e.name).is_file()]
        if missing:
            raise PlatvmError(
                f"Version {selector} is incomplete, missing: {', '.join(missing)}",
                hint=f"Run `platvm uninstall {selector}` and install it again",
            )

        active_dir = self.paths.active_bin_dir
        active_dir.mkdir(parents=True, exist_ok=True)
        for entry in manifest.contents:
            atomic_copy(version_dir / entry.name, active_dir / entry.name)
            LOGGER.debug(f"Copied {entry.name}@{entry.version} into {active_dir}")

        self.settings.save(Settings(channel=selector, version=manifest.version))
        LOGGER.info(f"Switched to {selector} ({manifest.version})")
        return manifest
