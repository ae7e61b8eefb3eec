"""Tests for host target detection."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from platvm.bootstrap.platform import (
    PlatformInfo,
    detect_target,
    get_platform_info,
    normalize_arch,
)
from platvm.core.errors import ArchitectureUnsupported


class TestNormalizeArch:
    def test_known_aliases(self) -> None:
        assert normalize_arch("AMD64") == "x86_64"
        assert normalize_arch("arm64") == "aarch64"
        assert normalize_arch("armv7l") == "armv7"

    def test_unknown(self) -> None:
        assert normalize_arch("riscv64") is None


class TestPlatformInfo:
    def test_linux_uses_musl(self) -> None:
        assert PlatformInfo("linux", "x86_64").target == "x86_64-unknown-linux-musl"
        assert PlatformInfo("linux", "armv7").target == "armv7-unknown-linux-gnueabihf"

    def test_darwin(self) -> None:
        assert PlatformInfo("darwin", "aarch64").target == "aarch64-apple-darwin"

    def test_unsupported(self) -> None:
        assert PlatformInfo("freebsd", "x86_64").target is None

    def test_get_platform_info(self) -> None:
        with patch("platform.system", return_value="Darwin"), patch(
            "platform.machine", return_value="arm64"
        ):
            info = get_platform_info()
        assert info == PlatformInfo("darwin", "aarch64")


class TestDetectTarget:
    def test_override_used_verbatim(self) -> None:
        assert detect_target("riscv64gc-unknown-linux-gnu") == "riscv64gc-unknown-linux-gnu"

    def test_detected(self) -> None:
        with patch(
            "platvm.bootstrap.platform.get_platform_info",
            return_value=PlatformInfo("linux", "aarch64"),
        ):
            assert detect_target() == "aarch64-unknown-linux-musl"

    def test_unsupported_host(self) -> None:
        with patch(
            "platvm.bootstrap.platform.get_platform_info",
            return_value=PlatformInfo("linux", "riscv64"),
        ):
            with pytest.raises(ArchitectureUnsupported) as exc_info:
                detect_target()
        assert "linux-riscv64" in str(exc_info.value)
