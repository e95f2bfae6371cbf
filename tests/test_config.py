"""Tests for perch.config: RouterConfig and RouteDefinition frozen dataclasses."""

import pytest

from perch.config import Mode, RouteDefinition, RouterConfig


class TestRouterConfig:
    def test_defaults(self) -> None:
        cfg = RouterConfig()

        assert cfg.layout is None
        assert cfg.mode == "hash"
        assert cfg.query_param == "page"
        assert cfg.view_selector == "view"
        assert cfg.routes == ()
        assert cfg.default_route is None
        assert cfg.auto_start is True

    def test_override(self) -> None:
        routes = (RouteDefinition("/", "Home"),)
        cfg = RouterConfig(mode="query", query_param="screen", routes=routes, auto_start=False)

        assert cfg.mode == "query"
        assert cfg.query_param == "screen"
        assert cfg.routes == routes
        assert cfg.auto_start is False

    def test_frozen(self) -> None:
        cfg = RouterConfig()

        with pytest.raises(AttributeError):
            cfg.mode = "history"  # type: ignore[misc]


class TestRouteDefinition:
    def test_props_default(self) -> None:
        route = RouteDefinition("/", "Home")
        assert route.props == {}

    def test_frozen(self) -> None:
        route = RouteDefinition("/", "Home")
        with pytest.raises(AttributeError):
            route.path = "/x"  # type: ignore[misc]


class TestMode:
    def test_values(self) -> None:
        assert {m.value for m in Mode} == {"hash", "query", "history"}

    def test_str_compatible(self) -> None:
        assert Mode.HISTORY == "history"
        assert Mode("query") is Mode.QUERY
