"""Wiring of configuration, stores and engine components for one invocation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from pathlib import Path
from typing import Optional

from platvm.bootstrap.paths import PlatvmPaths
from platvm.bootstrap.platform import detect_target
from platvm.config import PlatvmConfig, build_paths, load_config
from platvm.engine import (
    Installer,
    Resolver,
    SelfUpdater,
    Switcher,
    Updater,
    VersionRegistry,
)
from platvm.registry.client import ReleaseClient
from platvm.store.manifest import ManifestStore
from platvm.store.settings import SettingsStore


@dataclass
class AppContext:
    """Everything a command needs, built once per invocation.

    Tests construct it directly with an isolated home and a fake client.
    """

    config: PlatvmConfig
    paths: PlatvmPaths
    client: ReleaseClient
    target_override: Optional[str] = None

    @classmethod
    def load(cls, home: Optional[Path] = None) -> "AppContext":
        config = load_config(home)
        return cls(
            config=config,
            paths=build_paths(config),
            client=ReleaseClient(config.registry, installable=config.platform.binaries),
        )

    @cached_property
    def target(self) -> str:
        return detect_target(self.target_override)

    def use_target(self, triple: str) -> None:
        """Override the detected host target (``install --target``)."""
        self.target_override = triple
        self.__dict__.pop("target", None)

    @cached_property
    def settings(self) -> SettingsStore:
        return SettingsStore(self.paths)

    @cached_property
    def manifests(self) -> ManifestStore:
        return ManifestStore(self.paths)

    @cached_property
    def registry(self) -> VersionRegistry:
        return VersionRegistry(self.paths, self.manifests)

    @property
    def resolver(self) -> Resolver:
        return Resolver(self.client, self.target)

    @property
    def installer(self) -> Installer:
        return Installer(self.paths, self.resolver, self.manifests)

    @property
    def switcher(self) -> Switcher:
        return Switcher(self.paths, self.registry, self.settings)

    @property
    def updater(self) -> Updater:
        return Updater(
            self.paths,
            self.resolver,
            self.registry,
            self.settings,
            self.switcher,
        )

    @property
    def self_updater(self) -> SelfUpdater:
        return SelfUpdater(
            paths=self.paths,
            client=self.client,
            target=self.target,
            artifact_name=self.config.manager.artifact,
            override_version=self.config.manager.update_version,
        )
