"""Version resolution and installation engine."""

from platvm.engine.installer import InstallResult, Installer
from platvm.engine.resolver import Resolver, selector_or_default
from platvm.engine.self_update import SelfUpdateResult, SelfUpdateStatus, SelfUpdater
from platvm.engine.switcher import Switcher
from platvm.engine.updater import ArtifactChange, UpdateResult, UpdateStatus, Updater
from platvm.engine.versions import InstalledVersion, VersionRegistry

__all__ = [
    "ArtifactChange",
    "InstallResult",
    "InstalledVersion",
    "Installer",
    "Resolver",
    "SelfUpdateResult",
    "SelfUpdateStatus",
    "SelfUpdater",
    "Switcher",
    "UpdateResult",
    "UpdateStatus",
    "Updater",
    "VersionRegistry",
    "selector_or_default",
]
