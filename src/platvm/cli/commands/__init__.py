"""CLI commands package.

This module provides the base Command class and exports all command implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from argparse import Namespace
from typing import TYPE_CHECKING

from platvm.cli.output import Notifier

if TYPE_CHECKING:
    from platvm.cli.context import AppContext


class Command(ABC):
    """Base class for CLI commands.

    All CLI commands should inherit from this class and implement
    the execute method.
    """

    def __init__(self, notifier: Notifier) -> None:
        self.notify = notifier

    @property
    @abstractmethod
    def name(self) -> str:
        """Command identifier."""

    @abstractmethod
    def execute(self, args: Namespace, context: "AppContext") -> int:
        """Execute the command.

        Args:
            args: Parsed command-line arguments.
            context: Wired stores and engine components.

        Returns:
            Exit code (0 for success, non-zero for error).

        Raises:
            PlatvmError: Reported by the runner as a single diagnostic.
        """


# ruff: noqa: E402
from platvm.cli.commands.current import CurrentCommand
from platvm.cli.commands.install import InstallCommand
from platvm.cli.commands.itself import SelfCommand
from platvm.cli.commands.list_versions import ListCommand
from platvm.cli.commands.switch import SwitchCommand
from platvm.cli.commands.uninstall import UninstallCommand
from platvm.cli.commands.update import UpdateCommand
from platvm.cli.commands.version import VersionCommand

__all__ = [
    "Command",
    "CurrentCommand",
    "InstallCommand",
    "ListCommand",
    "SelfCommand",
    "SwitchCommand",
    "UninstallCommand",
    "UpdateCommand",
    "VersionCommand",
]
