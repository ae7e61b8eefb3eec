"""Bootstrap module for the platvm home directory.

This module handles:
- Platform detection (OS + architecture → release target triple)
- Home directory layout (~/.platvm/)
- Installing and removing the manager's own executable
"""

from platvm.bootstrap.platform import detect_target, get_platform_info, PlatformInfo
from platvm.bootstrap.paths import get_platvm_home, PlatvmPaths

__all__ = [
    "detect_target",
    "get_platform_info",
    "PlatformInfo",
    "get_platvm_home",
    "PlatvmPaths",
]
