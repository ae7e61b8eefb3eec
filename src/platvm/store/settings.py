"""Settings Store: the single ``settings.toml`` naming the active selector.

Format::

    version = "0.11.0"
    channel = "stable"          # channel selector

    version = "0.10.15"
    [channel]
    tag = "0.10.15"             # static version pin

An empty file is the valid initial state (nothing active).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict

import tomlkit

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import PlatvmError
from platvm.core.logging import get_logger
from platvm.core.models import Settings, selector_from_toml, selector_to_toml
from platvm.store.files import atomic_write_bytes

LOGGER = get_logger(__name__)


def dumps_settings(settings: Settings) -> str:
    """Render settings as TOML text."""
    doc = tomlkit.document()
    if settings.version is not None:
        doc["version"] = settings.version
    if settings.channel is not None:
        encoded = selector_to_toml(settings.channel)
        if isinstance(encoded, dict):
            table = tomlkit.table()
            for key, value in encoded.items():
                table[key] = value
            doc["channel"] = table
        else:
            doc["channel"] = encoded
    return tomlkit.dumps(doc)


def loads_settings(text: str) -> Settings:
    """Parse TOML text into settings.

    Raises:
        ValueError: If the text is not valid settings TOML.
    """
    data: Dict[str, Any] = tomllib.loads(text)
    channel = data.get("channel")
    version = data.get("version")
    if version is not None and not isinstance(version, str):
        raise ValueError("'version' must be a string")
    return Settings(
        channel=selector_from_toml(channel) if channel is not None else None,
        version=version,
    )


@dataclass
class SettingsStore:
    """Reads and writes ``settings.toml`` under the platvm home.

    Only the switch operation writes through this store.
    """

    paths: PlatvmPaths

    def load(self) -> Settings:
        path = self.paths.settings_file
        if not path.exists():
            return Settings()
        try:
            return loads_settings(path.read_text(encoding="utf-8"))
        except (tomllib.TOMLDecodeError, ValueError) as e:
            raise PlatvmError(
                f"Invalid settings file {path}: {e}",
                hint="Fix or delete the file, then run `platvm switch`",
            ) from e

    def save(self, settings: Settings) -> None:
        atomic_write_bytes(self.paths.settings_file, dumps_settings(settings).encode("utf-8"))
        LOGGER.debug(f"Settings updated: {settings.channel} ({settings.version})")

    def create_empty(self) -> bool:
        """Create an empty settings file unless one exists.

        Returns:
            True if the file was created.
        """
        path = self.paths.settings_file
        if path.exists():
            return False
        atomic_write_bytes(path, b"")
        return True
