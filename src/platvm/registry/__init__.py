"""Release Source Client: remote release metadata and artifact downloads."""

from platvm.registry.client import ReleaseClient
from platvm.registry.download import process_downloaded_bytes

__all__ = ["ReleaseClient", "process_downloaded_bytes"]
