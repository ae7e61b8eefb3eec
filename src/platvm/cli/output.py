"""User-facing console output.

Advisory output goes to stdout and is silenced by ``--quiet``; error
diagnostics go to stderr and are always shown.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO


@dataclass
class Notifier:
    quiet: bool = False
    out: Optional[TextIO] = None
    err: Optional[TextIO] = None

    def _out(self) -> TextIO:
        return self.out if self.out is not None else sys.stdout

    def _err(self) -> TextIO:
        return self.err if self.err is not None else sys.stderr

    def _print(self, text: str) -> None:
        if not self.quiet:
            print(text, file=self._out())

    def info(self, text: str) -> None:
        self._print(text)

    def done(self, text: str) -> None:
        self._print(f"done: {text}")

    def warn(self, text: str) -> None:
        self._print(f"warning: {text}")

    def help(self, text: str) -> None:
        self._print(f"help: {text}")

    def error(self, text: str) -> None:
        print(f"error: {text}", file=self._err())

    def table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        """Print left-aligned columns."""
        widths: List[int] = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(cell))
        for row in [list(headers), *rows]:
            line = "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))
            self._print(line.rstrip())
