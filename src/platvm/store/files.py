"""Write-new-then-rename file helpers.

Readers of a path written through these helpers see either the old file or
the complete new one, never a truncated mix. This is also what allows the
running manager executable to be replaced: the old inode stays valid for
the process that has it open.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path


def _temp_sibling(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    return Path(temp_name)


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Replace ``path`` with ``data`` in one rename."""
    temp_path = _temp_sibling(path)
    try:
        with open(temp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    finally:
        temp_path.unlink(missing_ok=True)


def atomic_copy(src: Path, dest: Path) -> None:
    """Copy ``src`` over ``dest`` (permissions included) in one rename."""
    temp_path = _temp_sibling(dest)
    try:
        shutil.copy2(src, temp_path)
        os.replace(temp_path, dest)
    finally:
        temp_path.unlink(missing_ok=True)
