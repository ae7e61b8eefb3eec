"""Verification and unpacking of downloaded artifact payloads."""

from __future__ import annotations

import hashlib
import io
import os
import zipfile
from pathlib import Path
from typing import Optional

from platvm.core.errors import IntegrityError
from platvm.core.logging import get_logger
from platvm.core.models import Artifact

LOGGER = get_logger(__name__)

ZIP_MAGIC = b"PK\x03\x04"


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def verify_digest(data: bytes, artifact: Artifact) -> None:
    """Check ``data`` against the artifact's published sha256 digest.

    Artifacts without a digest pass unchecked.

    Raises:
        IntegrityError: On mismatch.
    """
    if not artifact.sha256_digest:
        return

    expected = artifact.sha256_digest.strip()
    if expected.startswith("sha256:"):
        expected = expected[len("sha256:"):]
    expected = expected.lower()
    actual = sha256_hex(data)

    if actual != expected:
        LOGGER.error(
            f"Checksum mismatch for {artifact.name}: expected {expected}, got {actual}"
        )
        raise IntegrityError(
            f"DANGER: Downloaded artifact checksum did not match for {artifact.name}"
        )
    LOGGER.debug(f"Checksum verified for {artifact.name}")


def is_zip_archive(data: bytes) -> bool:
    return data[: len(ZIP_MAGIC)] == ZIP_MAGIC


def _select_zip_entry(archive: zipfile.ZipFile, name: str) -> zipfile.ZipInfo:
    """Pick the entry ending with ``name``, else the first file entry."""
    files = [info for info in archive.infolist() if not info.is_dir()]
    if not files:
        raise IntegrityError("Downloaded zip archive does not contain any file entries")
    for info in files:
        if info.filename.endswith(name):
            return info
    return files[0]


def process_downloaded_bytes(
    data: bytes,
    content_type: Optional[str],
    artifact: Artifact,
    target_dir: Path,
) -> Path:
    """Verify a downloaded payload and write the binary into ``target_dir``.

    The digest covers the raw payload (the archive, when zipped), so it is
    checked before anything is extracted or written.

    Returns:
        Path to ``target_dir / artifact.name``.

    Raises:
        IntegrityError: On digest mismatch or empty/unusable payloads.
    """
    verify_digest(data, artifact)

    is_zip_type = content_type is not None and "zip" in content_type.lower()
    if is_zip_type or is_zip_archive(data):
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                if not archive.infolist():
                    raise IntegrityError("Downloaded zip archive is empty")
                entry = _select_zip_entry(archive, artifact.name)
                payload = archive.read(entry)
                expected_size = entry.file_size
        except zipfile.BadZipFile as e:
            raise IntegrityError(f"Downloaded archive for {artifact.name} is corrupt: {e}") from e
        if not payload:
            raise IntegrityError("Downloaded zip entry is empty")
        if len(payload) != expected_size:
            raise IntegrityError("Extracted file size does not match zip entry size")
    else:
        payload = data
        if not payload:
            raise IntegrityError("Downloaded artifact is empty")

    out_path = target_dir / artifact.name
    out_path.write_bytes(payload)
    set_executable_mode(out_path)
    LOGGER.debug(f"Artifact {artifact.name} written to {out_path}")
    return out_path


def set_executable_mode(path: Path) -> None:
    """Make a file executable for everyone who can read it (no-op on Windows)."""
    if os.name == "nt":
        return
    path.chmod(path.stat().st_mode | 0o111)
