"""Manifest Store: ``versions/<selector>/manifest.json``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import PlatvmError
from platvm.core.logging import get_logger
from platvm.core.models import Manifest
from platvm.store.files import atomic_write_bytes

LOGGER = get_logger(__name__)

MANIFEST_FILE_NAME = "manifest.json"


def read_manifest(path: Path) -> Optional[Manifest]:
    """Read a manifest file.

    Returns:
        The manifest, or None if the file does not exist.

    Raises:
        PlatvmError: If the file exists but cannot be parsed.
    """
    if not path.exists():
        return None
    try:
        return Manifest.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise PlatvmError(f"Failed to parse manifest {path}: {e}") from e


def write_manifest(path: Path, manifest: Manifest) -> None:
    """Write a manifest file atomically."""
    payload = json.dumps(manifest.to_dict(), indent=2) + "\n"
    atomic_write_bytes(path, payload.encode("utf-8"))


@dataclass
class ManifestStore:
    """Reads and writes the manifest colocated with each version directory."""

    paths: PlatvmPaths

    def load(self, selector: object) -> Optional[Manifest]:
        return read_manifest(self.paths.manifest_file(selector))

    def save(self, selector: object, manifest: Manifest) -> None:
        write_manifest(self.paths.manifest_file(selector), manifest)
        LOGGER.debug(f"Wrote manifest for {selector} ({manifest.version})")
