"""Install command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.core.models import Channel
from platvm.engine import selector_or_default


class InstallCommand(Command):
    """Installs a channel or pinned version without activating it."""

    @property
    def name(self) -> str:
        return "install"

    def execute(self, args: Namespace, context: AppContext) -> int:
        if getattr(args, "target", None):
            context.use_target(args.target)
        settings = context.settings.load()
        selector = selector_or_default(getattr(args, "selector", None), settings)

        result = context.installer.install(selector)
        version = result.manifest.version

        if result.already_installed:
            self.notify.info(f"{selector} is already installed ({version})")
            if isinstance(selector, Channel):
                self.notify.help("Use `platvm update` to fetch the newest release of this channel")
            return EXIT_SUCCESS

        self.notify.done(f"Installed {selector} ({version}) to {result.path}")
        if settings.channel != selector:
            self.notify.help(f"Use `platvm switch {selector}` to make it active")
        return EXIT_SUCCESS
