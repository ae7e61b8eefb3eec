"""Durable local state: per-version manifests and global settings."""

from platvm.store.manifest import ManifestStore
from platvm.store.files import atomic_copy, atomic_write_bytes
from platvm.store.settings import SettingsStore

__all__ = ["ManifestStore", "SettingsStore", "atomic_copy", "atomic_write_bytes"]
