"""Error taxonomy for platvm operations.

Every failure a command can report derives from ``PlatvmError``. The CLI
runner prints ``str(error)`` as a single diagnostic line, followed by the
optional ``hint``.
"""

from __future__ import annotations

from typing import Optional


class PlatvmError(Exception):
    """Base class for errors surfaced to the user."""

    hint: Optional[str] = None

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        if hint is not None:
            self.hint = hint


class ReleaseNotFound(PlatvmError):
    """The registry has no release for the requested tag."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Release not found for tag {tag}")


class ArchitectureUnsupported(PlatvmError):
    """A release exists but carries no artifacts for the host target."""

    def __init__(self, release: str, target: str) -> None:
        self.release = release
        self.target = target
        super().__init__(
            f'Release "{release}" does not have artifacts for architecture: "{target}"'
        )


class VersionNotInstalled(PlatvmError):
    """The selector has no local version directory."""

    def __init__(self, selector: str) -> None:
        self.selector = selector
        super().__init__(
            f"Version {selector} is not installed",
            hint=f"Use `platvm install {selector}` to install it first",
        )


class NoSelectorProvided(PlatvmError):
    """No selector was given and none is active."""

    def __init__(self) -> None:
        super().__init__(
            "No version provided",
            hint="Use `platvm list` to see installed versions",
        )


class AlreadyInstalled(PlatvmError):
    """The running executable is already the installed manager copy."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"platvm is already installed at {path}")


class NotATerminal(PlatvmError):
    """A destructive confirmation was required without an interactive input."""

    def __init__(self) -> None:
        super().__init__(
            "Cannot prompt for confirmation: stdin is not a terminal",
            hint="Pass --yes to confirm without prompting",
        )


class NetworkError(PlatvmError):
    """Transport or HTTP failure while talking to the registry."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class IntegrityError(PlatvmError):
    """Downloaded bytes do not match the published digest, or are unusable."""
