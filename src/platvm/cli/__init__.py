"""Command-line interface for platvm."""

from __future__ import annotations

import sys
from typing import Iterable, Optional


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Returns an exit code suitable for use as a console script.
    """
    from platvm.cli.runner import CLIRunner

    return CLIRunner().run(argv if argv is not None else sys.argv[1:])


__all__ = ["main"]
