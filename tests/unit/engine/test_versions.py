"""Tests for the installed version registry."""

from __future__ import annotations

import pytest

from platvm.cli.context import AppContext
from platvm.core.errors import VersionNotInstalled
from platvm.core.models import Channel, Settings, StaticVersion


class TestInstalled:
    def test_empty(self, context: AppContext) -> None:
        assert context.registry.installed(Settings()) == []

    def test_order_and_active_marker(self, context: AppContext, fake_client) -> None:
        fake_client.publish("0.9.0", "0.9.0")
        fake_client.publish("latest", "0.11.1-dev.2")
        for text in ("0.9.0", "0.10.15"):
            context.installer.install(StaticVersion(text))
        context.installer.install(Channel("stable"))
        context.installer.install(Channel("latest"))

        items = context.registry.installed(
            Settings(channel=StaticVersion("0.10.15"), version="0.10.15")
        )

        assert [str(i.selector) for i in items] == ["latest", "stable", "0.10.15", "0.9.0"]
        assert [i.active for i in items] == [False, False, True, False]

    def test_channel_and_static_with_same_number_are_distinct(
        self, context: AppContext, fake_client
    ) -> None:
        fake_client.publish("0.11.0", "0.11.0")
        context.installer.install(Channel("stable"))
        context.installer.install(StaticVersion("0.11.0"))

        items = context.registry.installed(
            Settings(channel=Channel("stable"), version="0.11.0")
        )

        assert [(str(i.selector), i.active) for i in items] == [
            ("stable", True),
            ("0.11.0", False),
        ]

    def test_skips_staging_and_unmanaged_dirs(self, context: AppContext) -> None:
        (context.paths.versions_dir / ".staging-stable-abc").mkdir()
        (context.paths.versions_dir / "broken").mkdir()
        assert context.registry.installed(Settings()) == []


class TestRemove:
    def test_remove(self, context: AppContext, stable: Channel) -> None:
        context.installer.install(stable)
        context.registry.remove(stable)
        assert not context.paths.version_dir(stable).exists()
        assert context.registry.is_installed(stable) is False

    def test_remove_missing(self, context: AppContext) -> None:
        with pytest.raises(VersionNotInstalled):
            context.registry.remove(StaticVersion("0.10.15"))
