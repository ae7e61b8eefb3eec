"""Installing and removing platvm itself under its home directory."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path

from platvm.bootstrap.paths import PlatvmPaths
from platvm.core.errors import AlreadyInstalled
from platvm.core.logging import get_logger
from platvm.store.files import atomic_copy, atomic_write_bytes
from platvm.store.settings import SettingsStore

LOGGER = get_logger(__name__)

ENV_TEMPLATE = """\
#!/bin/sh
# platvm shell setup
case ":${{PATH}}:" in
    *:"{platform_bin}":*)
        ;;
    *)
        export PATH="{platform_bin}:$PATH"
        ;;
esac
case ":${{PATH}}:" in
    *:"{manager_bin}":*)
        ;;
    *)
        export PATH="{manager_bin}:$PATH"
        ;;
esac
"""


def current_executable() -> Path:
    """Path of the program being run.

    Frozen builds run from ``sys.executable``; otherwise the console
    script in ``sys.argv[0]`` is the executable.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve()
    return Path(sys.argv[0]).resolve()


def render_env_file(paths: PlatvmPaths) -> str:
    """Shell snippet prepending the manager and platform bin dirs to PATH."""
    return ENV_TEMPLATE.format(
        manager_bin=paths.bin_dir,
        platform_bin=paths.active_bin_dir,
    )


def self_install(paths: PlatvmPaths, source: Path) -> Path:
    """Install ``source`` as the manager executable.

    Creates the home layout, the env file and an empty settings file. An
    existing settings file is preserved.

    Returns:
        Path of the installed executable.

    Raises:
        AlreadyInstalled: If ``source`` already is the installed executable.
    """
    target = paths.executable
    if target.exists() and source.resolve() == target.resolve():
        raise AlreadyInstalled(str(target))

    paths.ensure_directories()
    atomic_copy(source, target)
    if os.name != "nt":
        target.chmod(target.stat().st_mode | 0o111)
    LOGGER.info(f"Installed platvm to {target}")

    atomic_write_bytes(paths.env_file, render_env_file(paths).encode("utf-8"))
    if SettingsStore(paths).create_empty():
        LOGGER.debug(f"Created {paths.settings_file}")
    return target


def self_uninstall(paths: PlatvmPaths) -> bool:
    """Remove the platvm home directory.

    The platform's shared binaries directory is left in place.

    Returns:
        False if there was nothing to remove.
    """
    if not paths.home.exists():
        return False
    shutil.rmtree(paths.home)
    LOGGER.info(f"Removed {paths.home}")
    return True


def shell_hint(paths: PlatvmPaths, shell: str) -> str:
    """Command that makes the user's shell pick up the env file."""
    name = Path(shell).name if shell else ""
    if name == "fish":
        return f'fish_add_path "{paths.bin_dir}" "{paths.active_bin_dir}"'
    if name == "zsh":
        return f"echo 'source \"{paths.env_file}\"' >> ~/.zshrc"
    return f"echo 'source \"{paths.env_file}\"' >> ~/.bashrc"
