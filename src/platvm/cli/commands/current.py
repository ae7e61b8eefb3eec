"""Current command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.core.models import Channel, Settings


def describe_active(settings: Settings) -> str:
    """``0.10.15`` for a pinned version, ``0.11.0 (stable)`` for a channel."""
    if isinstance(settings.channel, Channel):
        return f"{settings.version} ({settings.channel})"
    return str(settings.version)


class CurrentCommand(Command):
    """Prints the active version."""

    @property
    def name(self) -> str:
        return "current"

    def execute(self, args: Namespace, context: AppContext) -> int:
        settings = context.settings.load()
        if settings.channel is None:
            self.notify.warn("No active version set")
            self.notify.help("Use `platvm switch <version>` to activate an installed version")
            return EXIT_SUCCESS

        self.notify.info(describe_active(settings))
        if not context.registry.is_installed(settings.channel):
            self.notify.warn(f"The active version {settings.channel} is no longer installed")
            self.notify.help(f"Use `platvm install {settings.channel}` to reinstall it")
        return EXIT_SUCCESS
