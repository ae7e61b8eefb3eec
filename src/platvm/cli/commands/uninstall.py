"""Uninstall command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.core.models import parse_selector


class UninstallCommand(Command):
    """Removes an installed version directory."""

    @property
    def name(self) -> str:
        return "uninstall"

    def execute(self, args: Namespace, context: AppContext) -> int:
        selector = parse_selector(args.selector)
        context.registry.remove(selector)
        self.notify.done(f"Removed {selector}")

        if context.settings.load().channel == selector:
            self.notify.warn(
                f"{selector} was the active version; its binaries stay in "
                f"{context.paths.active_bin_dir} until the next switch"
            )
            self.notify.help("Use `platvm switch <version>` to activate another version")
        return EXIT_SUCCESS
