"""Switch command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.core.errors import NoSelectorProvided
from platvm.core.models import parse_selector


class SwitchCommand(Command):
    """Makes an installed version active."""

    @property
    def name(self) -> str:
        return "switch"

    def execute(self, args: Namespace, context: AppContext) -> int:
        text = getattr(args, "selector", None)
        if text:
            selector = parse_selector(text)
        else:
            selector = context.settings.load().channel
            if selector is None:
                raise NoSelectorProvided()

        manifest = context.switcher.switch(selector)
        self.notify.done(f"Now using {selector} ({manifest.version})")
        return EXIT_SUCCESS
