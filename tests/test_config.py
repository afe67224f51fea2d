"""Tests for waymark.config — NavigationConfig frozen dataclass."""

import pytest

from waymark.config import NavigationConfig
from waymark.history.memory import MemoryHistory
from waymark.routing.route import RouteNode
from waymark.routing.router import Router


class TestNavigationConfig:
    def test_defaults(self) -> None:
        cfg = NavigationConfig()

        assert cfg.basename == "/"
        assert cfg.key_length == 8
        assert cfg.warn_once is True

    def test_override(self) -> None:
        cfg = NavigationConfig(basename="/app", key_length=12, warn_once=False)

        assert cfg.basename == "/app"
        assert cfg.key_length == 12
        assert cfg.warn_once is False

    def test_frozen(self) -> None:
        cfg = NavigationConfig()

        with pytest.raises(AttributeError):
            cfg.basename = "/other"  # type: ignore[misc]


class TestConfigWiring:
    def test_router_uses_basename(self) -> None:
        router = Router([RouteNode(path="/a")], NavigationConfig(basename="/app"))
        assert router.match("/app/a") is not None
        assert router.match("/a") is None

    def test_history_uses_key_length(self) -> None:
        history = MemoryHistory(config=NavigationConfig(key_length=16))
        history.push("/a")
        assert len(history.location.key) == 16

    def test_warn_once_passed_to_diagnostics(self) -> None:
        assert Router([], NavigationConfig(warn_once=False)).diagnostics.warn_once is False
        assert MemoryHistory(config=NavigationConfig(warn_once=False)).diagnostics.warn_once is False
