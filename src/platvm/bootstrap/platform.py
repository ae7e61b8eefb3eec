"""Host target detection.

Maps the running OS and CPU architecture to the target triple used to
name release artifacts in the registry.
"""

from __future__ import annotations

import platform
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from platvm.core.errors import ArchitectureUnsupported

# Architecture normalization map
_ARCH_MAP = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
    "aarch64": "aarch64",
    "armv7l": "armv7",
    "armv7": "armv7",
}

# (os, normalized arch) -> release target triple
_TARGETS: Dict[Tuple[str, str], str] = {
    ("linux", "x86_64"): "x86_64-unknown-linux-musl",
    ("linux", "aarch64"): "aarch64-unknown-linux-musl",
    ("linux", "armv7"): "armv7-unknown-linux-gnueabihf",
    ("darwin", "x86_64"): "x86_64-apple-darwin",
    ("darwin", "aarch64"): "aarch64-apple-darwin",
    ("windows", "x86_64"): "x86_64-pc-windows-msvc",
}


def normalize_arch(machine: str) -> Optional[str]:
    """Normalize architecture string to standard form.

    Args:
        machine: Raw architecture string from platform.machine()

    Returns:
        Normalized architecture string or None if unknown.
    """
    return _ARCH_MAP.get(machine.lower())


@dataclass(frozen=True)
class PlatformInfo:
    """Information about the current platform.

    Attributes:
        os: Operating system (darwin, linux, windows).
        arch: Normalized CPU architecture (x86_64, aarch64, armv7).
    """

    os: str
    arch: str

    @property
    def target(self) -> Optional[str]:
        """Release target triple, or None when no release ships for this host."""
        return _TARGETS.get((self.os, self.arch))


def get_platform_info() -> PlatformInfo:
    """Detect and return current platform information."""
    machine = platform.machine()
    return PlatformInfo(
        os=platform.system().lower(),
        arch=normalize_arch(machine) or machine.lower(),
    )


def detect_target(override: Optional[str] = None) -> str:
    """Return the target triple to download artifacts for.

    Args:
        override: Explicit triple (``install --target``); used verbatim.

    Raises:
        ArchitectureUnsupported: If the host maps to no known target.
    """
    if override:
        return override
    info = get_platform_info()
    target = info.target
    if target is None:
        raise ArchitectureUnsupported("any", f"{info.os}-{info.arch}")
    return target
