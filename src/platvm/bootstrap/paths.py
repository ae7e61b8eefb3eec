"""Path management for the platvm home directory.

Handles the ~/.platvm directory structure and the platform's shared
binaries directory that is exposed on PATH.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

# Default directory name under user home
DEFAULT_HOME_DIR_NAME = ".platvm"

# Environment variable to override home directory
PLATVM_HOME_ENV = "PLATVM_HOME"

# Name of the manager executable inside bin/
EXECUTABLE_NAME = "platvm.exe" if os.name == "nt" else "platvm"


def get_platvm_home() -> Path:
    """Get the platvm home directory path.

    Resolution order:
    1. PLATVM_HOME environment variable (if set)
    2. ~/.platvm (default)

    Returns:
        Path to the platvm home directory.
    """
    env_home = os.environ.get(PLATVM_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


@dataclass
class PlatvmPaths:
    """Manages paths within the platvm home directory.

    Directory structure:
        ~/.platvm/
            bin/
                platvm                  - Manager executable
                env                     - Sourceable PATH setup
            versions/
                stable/                 - Binaries + manifest.json per selector
                0.10.15/
            settings.toml               - Active selector
            config.yml                  - Optional user configuration

        <platform home>/bin/            - Binaries of the active version
    """

    home: Path
    platform_home: Path

    _BIN_DIR: ClassVar[str] = "bin"
    _VERSIONS_DIR: ClassVar[str] = "versions"
    _SETTINGS_FILE: ClassVar[str] = "settings.toml"
    _CONFIG_FILE: ClassVar[str] = "config.yml"
    _ENV_FILE: ClassVar[str] = "env"
    _MANIFEST_FILE: ClassVar[str] = "manifest.json"

    @property
    def bin_dir(self) -> Path:
        """Directory holding the manager executable and env file."""
        return self.home / self._BIN_DIR

    @property
    def executable(self) -> Path:
        """Installed manager executable."""
        return self.bin_dir / EXECUTABLE_NAME

    @property
    def env_file(self) -> Path:
        return self.bin_dir / self._ENV_FILE

    @property
    def versions_dir(self) -> Path:
        """Directory containing one subdirectory per installed selector."""
        return self.home / self._VERSIONS_DIR

    @property
    def settings_file(self) -> Path:
        return self.home / self._SETTINGS_FILE

    @property
    def config_file(self) -> Path:
        return self.home / self._CONFIG_FILE

    @property
    def active_bin_dir(self) -> Path:
        """Shared directory on PATH mirroring the active version."""
        return self.platform_home / self._BIN_DIR

    def version_dir(self, selector: object) -> Path:
        """Get the directory for an installed selector.

        Args:
            selector: Selector (or its string form) naming the directory.

        Returns:
            Path to ``versions/<selector>``.

        Raises:
            ValueError: If the selector would name anything other than a
                direct child of ``versions/``.
        """
        path = self.versions_dir / str(selector)
        if path.parent != self.versions_dir or path.name in ("", ".", ".."):
            raise ValueError(f"Invalid selector: {str(selector)!r}")
        return path

    def manifest_file(self, selector: object) -> Path:
        return self.version_dir(selector) / self._MANIFEST_FILE

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        for directory in (self.home, self.bin_dir, self.versions_dir):
            directory.mkdir(parents=True, exist_ok=True)
