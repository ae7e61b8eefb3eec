"""Data model for selectors, releases and installed manifests."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

# Semantic version, optionally prefixed with "v" (https://semver.org grammar).
SEMVER_PATTERN = re.compile(
    r"^v?(?P<version>"
    r"(?:0|[1-9]\d*)\.(?:0|[1-9]\d*)\.(?:0|[1-9]\d*)"
    r"(?:-(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*)?"
    r"(?:\+[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*)?"
    r")$"
)

STABLE_CHANNEL = "stable"
LATEST_CHANNEL = "latest"


@dataclass(frozen=True)
class Channel:
    """A named, moving pointer to a release (e.g. ``stable``, ``latest``)."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class StaticVersion:
    """An immutable pin to one semantic version."""

    version: str

    def __str__(self) -> str:
        return self.version

    @property
    def tag(self) -> str:
        """Registry tag for this version."""
        return f"v{self.version}"


Selector = Union[Channel, StaticVersion]


def parse_semver(text: str) -> Optional[str]:
    """Return the normalized version (no ``v`` prefix) or None."""
    match = SEMVER_PATTERN.match(text.strip())
    if match is None:
        return None
    return match.group("version")


def parse_selector(text: str) -> Selector:
    """Parse user input into a selector.

    Anything that is a semantic version is a static pin; everything else
    names a channel.

    Raises:
        ValueError: If the text is empty or cannot name a single directory
            under ``versions/`` (path separators, leading dot).
    """
    text = text.strip()
    if not text:
        raise ValueError("Selector cannot be empty")
    if text.startswith(".") or any(sep in text for sep in ("/", "\\", os.sep)):
        raise ValueError(f"Invalid selector: {text!r}")
    version = parse_semver(text)
    if version is not None:
        return StaticVersion(version)
    return Channel(text)


def selector_to_toml(selector: Selector) -> Union[str, Dict[str, str]]:
    """Encode a selector the way settings and manifests persist it.

    Channels are bare strings; static versions are ``{"tag": "<version>"}``.
    """
    if isinstance(selector, StaticVersion):
        return {"tag": selector.version}
    return selector.name


def selector_from_toml(value: Any) -> Selector:
    """Decode the persisted form produced by ``selector_to_toml``."""
    if isinstance(value, str):
        return Channel(value)
    if isinstance(value, dict) and isinstance(value.get("tag"), str):
        return StaticVersion(value["tag"])
    raise ValueError(f"Invalid channel value: {value!r}")


@dataclass(frozen=True)
class Artifact:
    """One downloadable binary of a release for a given target."""

    name: str
    version: str
    download_url: str
    sha256_digest: Optional[str] = None


@dataclass
class ReleaseDescriptor:
    """Remote metadata for one resolved release on one target."""

    tag: str
    version: str
    target: str
    artifacts: List[Artifact] = field(default_factory=list)

    def artifact(self, name: str) -> Optional[Artifact]:
        for artifact in self.artifacts:
            if artifact.name == name:
                return artifact
        return None


@dataclass(frozen=True)
class ArtifactEntry:
    """Manifest record for one installed binary."""

    name: str
    version: str


@dataclass
class Manifest:
    """What was actually installed for one selector.

    Stored as ``versions/<selector>/manifest.json``.
    """

    channel: Selector
    version: str
    contents: List[ArtifactEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "channel": selector_to_toml(self.channel),
            "version": self.version,
            "contents": [
                {"name": entry.name, "version": entry.version}
                for entry in self.contents
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        """Create from dictionary (e.g., from JSON)."""
        return cls(
            channel=selector_from_toml(data["channel"]),
            version=data["version"],
            contents=[
                ArtifactEntry(name=item["name"], version=item["version"])
                for item in data.get("contents", [])
            ],
        )

    def entry(self, name: str) -> Optional[ArtifactEntry]:
        for entry in self.contents:
            if entry.name == name:
                return entry
        return None


@dataclass
class Settings:
    """The single global record of the active selector.

    An empty settings file decodes to ``Settings()`` with nothing active.
    """

    channel: Optional[Selector] = None
    version: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return self.channel is not None
