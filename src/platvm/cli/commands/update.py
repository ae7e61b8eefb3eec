"""Update command implementation."""

from __future__ import annotations

from argparse import Namespace

from platvm.cli.commands import Command
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_SUCCESS
from platvm.engine import UpdateStatus


class UpdateCommand(Command):
    """Updates the active channel to the release it currently points at."""

    @property
    def name(self) -> str:
        return "update"

    def execute(self, args: Namespace, context: AppContext) -> int:
        result = context.updater.update()

        if result.status == UpdateStatus.STATIC_VERSION:
            self.notify.info(
                f"Cannot update a static version ({result.selector}); use a channel instead"
            )
            self.notify.help("Use `platvm install stable` and `platvm switch stable` to track releases")
            return EXIT_SUCCESS

        if result.status == UpdateStatus.UP_TO_DATE:
            self.notify.info(f"Already up to date ({result.selector} {result.new_version})")
            return EXIT_SUCCESS

        for change in result.changes:
            if change.old_version is None:
                self.notify.info(f"Added {change.name} {change.new_version}")
            elif change.new_version is None:
                self.notify.info(f"Removed {change.name} {change.old_version}")
            else:
                self.notify.info(
                    f"Updated {change.name} from {change.old_version} to {change.new_version}"
                )
        self.notify.done(
            f"Updated {result.selector} from {result.old_version} to {result.new_version}"
        )
        if result.switched:
            self.notify.info(f"Now using {result.selector} ({result.new_version})")
        return EXIT_SUCCESS
