"""Self command implementation: install, uninstall and update platvm."""

from __future__ import annotations

import os
import sys
from argparse import Namespace

import questionary
from questionary import Style

from platvm.bootstrap.install import current_executable, self_install, self_uninstall, shell_hint
from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from platvm.core.errors import NotATerminal
from platvm.engine import SelfUpdateStatus

STYLE = Style([
    ("qmark", "fg:yellow bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
])


class SelfCommand(Command):
    """Dispatches ``platvm self <install|uninstall|update>``."""

    @property
    def name(self) -> str:
        return "self"

    def execute(self, args: Namespace, context: AppContext) -> int:
        sub = getattr(args, "self_command", None)
        if sub == "install":
            return self._install(context)
        if sub == "uninstall":
            return self._uninstall(args, context)
        if sub == "update":
            return self._update(context)
        self.notify.error("Missing self command: use install, uninstall or update")
        return EXIT_INVALID_USAGE

    def _install(self, context: AppContext) -> int:
        installed = self_install(context.paths, current_executable())
        self.notify.done(f"Installed platvm to {installed}")
        self.notify.info(
            f"Add {context.paths.bin_dir} and {context.paths.active_bin_dir} to your PATH:"
        )
        self.notify.info(f"    {shell_hint(context.paths, os.environ.get('SHELL', ''))}")
        return EXIT_SUCCESS

    def _uninstall(self, args: Namespace, context: AppContext) -> int:
        if not getattr(args, "yes", False):
            if not sys.stdin.isatty():
                raise NotATerminal()
            confirmed = questionary.confirm(
                f"Remove {context.paths.home} and every installed version?",
                default=False,
                style=STYLE,
            ).ask()
            if not confirmed:
                self.notify.info("Aborted.")
                return EXIT_SUCCESS

        if self_uninstall(context.paths):
            self.notify.done(f"Removed {context.paths.home}")
        else:
            self.notify.warn(f"Nothing to remove at {context.paths.home}")
        return EXIT_SUCCESS

    def _update(self, context: AppContext) -> int:
        result = context.self_updater.update()
        if result.status == SelfUpdateStatus.UP_TO_DATE:
            self.notify.info("Already up-to-date")
            return EXIT_SUCCESS
        self.notify.done(
            f"Updated platvm from {result.current_version} to {result.target_version}"
        )
        return EXIT_SUCCESS
