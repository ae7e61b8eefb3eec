"""Argument parser construction for the platvm CLI.

This module builds the argument parser with subcommands:
- platvm install   - Install a channel or pinned version
- platvm switch    - Make an installed version active
- platvm update    - Move the active channel to its newest release
- platvm uninstall - Remove an installed version
- platvm list      - Show installed versions
- platvm current   - Show the active version
- platvm version   - Show platvm version information
- platvm self      - Install, update or remove platvm itself
"""

from __future__ import annotations

import argparse


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress all output except errors.",
    )


def _build_install_parser(subparsers: argparse._SubParsersAction) -> None:
    install_parser = subparsers.add_parser(
        "install",
        help="Install a platform version.",
        description=(
            "Download and verify every binary of a release. The selector is a "
            "channel name (stable, latest) or a version such as 0.10.15. "
            "Installing does not change the active version."
        ),
    )
    install_parser.add_argument(
        "selector",
        nargs="?",
        help="Channel or version to install (default: active selector, else stable).",
    )
    install_parser.add_argument(
        "--target",
        metavar="TRIPLE",
        help="Target triple to download artifacts for (default: detected host).",
    )


def _build_switch_parser(subparsers: argparse._SubParsersAction) -> None:
    switch_parser = subparsers.add_parser(
        "switch",
        help="Make an installed version active.",
    )
    switch_parser.add_argument(
        "selector",
        nargs="?",
        help="Installed channel or version (default: active selector).",
    )


def _build_uninstall_parser(subparsers: argparse._SubParsersAction) -> None:
    uninstall_parser = subparsers.add_parser(
        "uninstall",
        help="Remove an installed version.",
    )
    uninstall_parser.add_argument("selector", help="Installed channel or version.")


def _build_list_parser(subparsers: argparse._SubParsersAction) -> None:
    list_parser = subparsers.add_parser(
        "list",
        help="List installed versions, or the binaries of one of them.",
    )
    list_parser.add_argument(
        "selector",
        nargs="?",
        help="Show the binaries installed for this channel or version.",
    )


def _build_self_parser(subparsers: argparse._SubParsersAction) -> None:
    self_parser = subparsers.add_parser(
        "self",
        help="Manage the platvm installation itself.",
    )
    self_subparsers = self_parser.add_subparsers(
        dest="self_command",
        title="self commands",
        metavar="COMMAND",
    )
    self_subparsers.add_parser(
        "install",
        help="Install this platvm executable into its home directory.",
    )
    uninstall_parser = self_subparsers.add_parser(
        "uninstall",
        help="Remove platvm and every installed version.",
    )
    uninstall_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Do not ask for confirmation.",
    )
    self_subparsers.add_parser(
        "update",
        help="Update platvm to the latest stable release.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for platvm CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="platvm",
        description="platvm - Install and switch between platform releases.",
        epilog=(
            "Examples:\n"
            "  platvm install                 # Install the stable channel\n"
            "  platvm install 0.10.15         # Install a pinned version\n"
            "  platvm switch 0.10.15          # Make it active\n"
            "  platvm update                  # Update the active channel\n"
            "  platvm list                    # Show installed versions\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_install_parser(subparsers)
    _build_switch_parser(subparsers)
    subparsers.add_parser("update", help="Update the active channel to its latest release.")
    _build_uninstall_parser(subparsers)
    _build_list_parser(subparsers)
    subparsers.add_parser("current", help="Show the active version.")
    subparsers.add_parser("version", help="Show platvm version information.")
    _build_self_parser(subparsers)

    return parser
