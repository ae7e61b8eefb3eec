"""Resolver: turns user input into a selector and a remote release."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from platvm.core.logging import get_logger
from platvm.core.models import (
    STABLE_CHANNEL,
    Channel,
    ReleaseDescriptor,
    Selector,
    Settings,
    parse_selector,
)
from platvm.registry.client import ReleaseClient

LOGGER = get_logger(__name__)


def selector_or_default(text: Optional[str], settings: Settings) -> Selector:
    """Parse ``text``, falling back to the active selector, then ``stable``."""
    if text:
        return parse_selector(text)
    if settings.channel is not None:
        return settings.channel
    return Channel(STABLE_CHANNEL)


@dataclass
class Resolver:
    """Maps selectors to release descriptors for one target triple."""

    client: ReleaseClient
    target: str

    def resolve(self, selector: Selector) -> ReleaseDescriptor:
        """Fetch the release currently designated by ``selector``.

        Raises:
            ReleaseNotFound: If the registry has no release for the tag.
            ArchitectureUnsupported: If the release lacks artifacts for
                the target.
        """
        descriptor = self.client.fetch_default_package_set(selector, self.target)
        LOGGER.info(f"Resolved {selector} to {descriptor.version} ({descriptor.tag})")
        return descriptor
