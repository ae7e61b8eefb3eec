"""List command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.core.models import parse_selector

ACTIVE_MARKER = "*"


class ListCommand(Command):
    """Lists installed versions, or the binaries of one version."""

    @property
    def name(self) -> str:
        return "list"

    def execute(self, args: Namespace, context: AppContext) -> int:
        text = getattr(args, "selector", None)
        if text:
            return self._list_artifacts(text, context)

        versions = context.registry.installed(context.settings.load())
        if not versions:
            self.notify.warn("No installed versions found")
            self.notify.help("Use `platvm install` to install a version")
            return EXIT_SUCCESS

        rows = [
            [
                ACTIVE_MARKER if item.active else "",
                str(item.selector),
                item.manifest.version,
            ]
            for item in versions
        ]
        self.notify.table(["", "CHANNEL", "VERSION"], rows)
        return EXIT_SUCCESS

    def _list_artifacts(self, text: str, context: AppContext) -> int:
        selector = parse_selector(text)
        manifest = context.registry.get(selector)
        self.notify.info(f"Artifacts in {selector} ({manifest.version}):")
        rows = [[entry.name, entry.version] for entry in manifest.contents]
        self.notify.table(["ARTIFACT", "VERSION"], rows)
        return EXIT_SUCCESS
