"""Tests for replacing the platvm executable."""

from __future__ import annotations

import pytest

from platvm.cli.context import AppContext
from platvm.core.errors import IntegrityError, PlatvmError
from platvm.core.models import Artifact, Channel, ReleaseDescriptor, Settings
from platvm.engine.self_update import SelfUpdateStatus, SelfUpdater

TARGET = "x86_64-unknown-linux-musl"


@pytest.fixture
def updater(context: AppContext, fake_client) -> SelfUpdater:
    fake_client.publish("stable", "0.11.0", {"fvm": "0.11.0", "fluvio": "0.11.0"})
    fake_client.publish("0.11.0", "0.11.0", {"fvm": "0.11.0", "fluvio": "0.11.0"})
    fake_client.publish("0.11.2", "0.11.2", {"fvm": "0.11.2"})
    context.paths.executable.write_bytes(b"old build")
    return SelfUpdater(
        paths=context.paths,
        client=fake_client,
        target=TARGET,
        artifact_name="fvm",
        current_version="0.10.0",
    )


class TestSelfUpdate:
    def test_updates_to_stable(self, updater: SelfUpdater) -> None:
        result = updater.update()

        assert result.status == SelfUpdateStatus.UPDATED
        assert (result.current_version, result.target_version) == ("0.10.0", "0.11.0")
        assert updater.paths.executable.read_bytes() == b"fvm-0.11.0"
        assert [p.name for p in updater.paths.bin_dir.iterdir()] == [
            updater.paths.executable.name
        ]

    def test_up_to_date(self, updater: SelfUpdater, fake_client) -> None:
        updater.current_version = "0.11.0"
        fake_client.downloads.clear()

        result = updater.update()

        assert result.status == SelfUpdateStatus.UP_TO_DATE
        assert fake_client.downloads == []
        assert updater.paths.executable.read_bytes() == b"old build"

    def test_override_version(self, updater: SelfUpdater) -> None:
        updater.override_version = "v0.11.2"
        result = updater.update()
        assert result.target_version == "0.11.2"
        assert updater.paths.executable.read_bytes() == b"fvm-0.11.2"

    def test_invalid_override(self, updater: SelfUpdater) -> None:
        updater.override_version = "soon"
        with pytest.raises(PlatvmError, match="Invalid update version"):
            updater.update()

    def test_never_touches_settings(self, context: AppContext, updater: SelfUpdater) -> None:
        stable = Channel("stable")
        context.settings.save(Settings(channel=stable, version="0.10.0"))
        before = context.paths.settings_file.read_bytes()

        updater.update()

        assert context.paths.settings_file.read_bytes() == before

    def test_missing_artifact(self, updater: SelfUpdater) -> None:
        updater.artifact_name = "platvm-nope"
        with pytest.raises(PlatvmError, match="artifact not found"):
            updater.update()
        assert updater.paths.executable.read_bytes() == b"old build"

    def test_missing_digest(self, updater: SelfUpdater, fake_client, monkeypatch) -> None:
        def no_digest(selector, target):
            return ReleaseDescriptor(
                tag="v0.11.0",
                version="0.11.0",
                target=target,
                artifacts=[Artifact("fvm", "0.11.0", "https://example.com/fvm")],
            )

        monkeypatch.setattr(fake_client, "fetch_package_set", no_digest)
        with pytest.raises(IntegrityError, match="missing sha256 digest"):
            updater.update()
        assert updater.paths.executable.read_bytes() == b"old build"


def test_context_wires_configured_artifact(context: AppContext) -> None:
    updater = context.self_updater
    assert updater.artifact_name == "fvm"
    assert updater.target == TARGET
    assert updater.override_version is None
