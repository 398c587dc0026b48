"""Tests for LauncherConfig defaults and validation."""

import dataclasses

import pytest

from roost.config import LauncherConfig
from roost.errors import ConfigurationError


class TestDefaults:
    def test_packaged_defaults(self) -> None:
        config = LauncherConfig()
        assert config.host == "localhost"
        assert config.preferred_port == 16810
        assert config.max_attempts == 10
        assert config.port_range == (1024, 41024)
        assert config.asset_root == "build"
        assert config.sniff_length == 512

    def test_index_path(self) -> None:
        assert LauncherConfig().index_path == "/build/index.html"
        assert LauncherConfig(asset_root="/dist/", index="app.html").index_path == "/dist/app.html"

    def test_frozen(self) -> None:
        config = LauncherConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.preferred_port = 80  # type: ignore[misc]


class TestLoopbackOnly:
    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1", "127.0.0.2"])
    def test_loopback_hosts_accepted(self, host: str) -> None:
        assert LauncherConfig(host=host).host == host

    @pytest.mark.parametrize("host", ["0.0.0.0", "::", "", "192.168.1.10", "example.com"])
    def test_other_hosts_rejected(self, host: str) -> None:
        with pytest.raises(ConfigurationError, match="refusing to serve"):
            LauncherConfig(host=host)

    def test_ipv6_loopback_rejected(self) -> None:
        # The listener is bound AF_INET, which cannot serve ::1.
        with pytest.raises(ConfigurationError, match="IPv4 loopback"):
            LauncherConfig(host="::1")


class TestValidation:
    def test_attempt_cap_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError, match="max_attempts"):
            LauncherConfig(max_attempts=0)

    @pytest.mark.parametrize("port_range", [(0, 10), (5000, 5000), (6000, 5000), (1024, 70000)])
    def test_bad_port_range(self, port_range: tuple[int, int]) -> None:
        with pytest.raises(ConfigurationError, match="port range"):
            LauncherConfig(port_range=port_range)

    def test_preferred_port_zero_means_any(self) -> None:
        assert LauncherConfig(preferred_port=0).preferred_port == 0

    def test_preferred_port_out_of_range(self) -> None:
        with pytest.raises(ConfigurationError):
            LauncherConfig(preferred_port=70000)

    def test_asset_root_required(self) -> None:
        with pytest.raises(ConfigurationError, match="asset_root"):
            LauncherConfig(asset_root="/")
