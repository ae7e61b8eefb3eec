"""Version command implementation."""

from __future__ import annotations

import platform
from argparse import Namespace
from typing import Optional

from platvm.bootstrap.platform import get_platform_info
from platvm.cli.commands import Command
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.cli.output import Notifier


class VersionCommand(Command):
    """Shows platvm version and host information."""

    def __init__(self, notifier: Notifier, version: str) -> None:
        super().__init__(notifier)
        self._version = version

    @property
    def name(self) -> str:
        return "version"

    def execute(self, args: Namespace, context: Optional[object] = None) -> int:
        info = get_platform_info()
        self.notify.info(f"platvm version: {self._version}")
        self.notify.info(f"Platform: {info.os}-{info.arch}")
        self.notify.info(f"Target: {info.target or 'unsupported'}")
        self.notify.info(f"Python: {platform.python_version()}")
        return EXIT_SUCCESS
