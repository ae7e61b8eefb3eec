"""Typed configuration for platvm."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_REGISTRY_URL = "https://api.github.com"
DEFAULT_REPOSITORY = "fluvio-community/fluvio"
DEFAULT_BINARIES = ["fluvio", "fluvio-run", "cdk", "smdk"]
DEFAULT_MANAGER_ARTIFACT = "fvm"
DEFAULT_PLATFORM_HOME_NAME = ".fluvio"


@dataclass
class RegistryConfig:
    """Where releases are published."""

    api_url: str = DEFAULT_REGISTRY_URL
    repository: str = DEFAULT_REPOSITORY
    token: Optional[str] = None


@dataclass
class PlatformConfig:
    """The managed distribution: its binaries and where they are exposed."""

    home: Path = field(default_factory=lambda: Path.home() / DEFAULT_PLATFORM_HOME_NAME)
    binaries: List[str] = field(default_factory=lambda: list(DEFAULT_BINARIES))


@dataclass
class ManagerConfig:
    """Settings for updating platvm itself."""

    artifact: str = DEFAULT_MANAGER_ARTIFACT
    update_version: Optional[str] = None


@dataclass
class PlatvmConfig:
    """Complete platvm configuration.

    Built from defaults, then ``<home>/config.yml``, then environment
    variables.
    """

    home: Path
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    platform: PlatformConfig = field(default_factory=PlatformConfig)
    manager: ManagerConfig = field(default_factory=ManagerConfig)
    sources: List[str] = field(default_factory=list)
