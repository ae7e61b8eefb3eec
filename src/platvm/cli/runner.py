"""CLI runner orchestration.

This module handles command dispatch and execution for the platvm CLI.
"""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import Dict, Iterable, Optional

from importlib.metadata import version, PackageNotFoundError

from platvm.cli.arguments import build_parser
from platvm.cli.commands import (
    Command,
    CurrentCommand,
    InstallCommand,
    ListCommand,
    SelfCommand,
    SwitchCommand,
    UninstallCommand,
    UpdateCommand,
    VersionCommand,
)
from platvm.cli.context import AppContext
from platvm.cli.exit_codes import EXIT_FAILURE, EXIT_INVALID_USAGE, EXIT_SUCCESS
from platvm.cli.output import Notifier
from platvm.config import ConfigError
from platvm.core.errors import PlatvmError
from platvm.core.logging import configure_logging, get_logger

LOGGER = get_logger(__name__)


def get_version() -> str:
    """Get platvm version.

    Returns:
        Version string from package metadata or fallback.
    """
    try:
        return version("platvm")
    except PackageNotFoundError:
        # Fallback for editable installs that have not yet built metadata.
        from platvm import __version__
        return __version__


class CLIRunner:
    """Orchestrates CLI execution with subcommand dispatch."""

    def __init__(self, context: Optional[AppContext] = None, home: Optional[Path] = None) -> None:
        """Initialize CLIRunner.

        Args:
            context: Pre-built context (tests inject one with a fake client).
            home: platvm home to load configuration from when no context
                is given.
        """
        self.parser = build_parser()
        self._version = get_version()
        self._context = context
        self._home = home

    def _commands(self, notifier: Notifier) -> Dict[str, Command]:
        return {
            "install": InstallCommand(notifier),
            "switch": SwitchCommand(notifier),
            "update": UpdateCommand(notifier),
            "uninstall": UninstallCommand(notifier),
            "list": ListCommand(notifier),
            "current": CurrentCommand(notifier),
            "self": SelfCommand(notifier),
        }

    def run(self, argv: Optional[Iterable[str]] = None) -> int:
        """Run the CLI.

        Args:
            argv: Command-line arguments (defaults to sys.argv).

        Returns:
            Exit code.
        """
        argv_list = list(argv) if argv is not None else None
        try:
            args = self.parser.parse_args(argv_list)
        except SystemExit as e:
            # argparse exits on --help (0) and on usage errors (2)
            return e.code if isinstance(e.code, int) else EXIT_INVALID_USAGE

        configure_logging(debug=args.debug, verbose=args.verbose, quiet=args.quiet)
        notifier = Notifier(quiet=args.quiet)

        command = getattr(args, "command", None)
        if command is None:
            self.parser.print_help()
            return EXIT_SUCCESS

        if command == "version":
            return VersionCommand(notifier, self._version).execute(args)

        try:
            context = self._context if self._context is not None else AppContext.load(self._home)
            return self._commands(notifier)[command].execute(args, context)
        except ConfigError as e:
            notifier.error(str(e))
            return EXIT_INVALID_USAGE
        except PlatvmError as e:
            notifier.error(str(e))
            if e.hint:
                notifier.help(e.hint)
            return EXIT_FAILURE
        except ValueError as e:
            notifier.error(str(e))
            return EXIT_INVALID_USAGE
        except OSError as e:
            if args.debug:
                traceback.print_exc()
            notifier.error(str(e))
            return EXIT_FAILURE
        except KeyboardInterrupt:
            notifier.error("Interrupted")
            return EXIT_FAILURE
