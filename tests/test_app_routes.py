"""Regression tests for application route registration."""
from fastapi.routing import APIRoute

from shopgrowth.main import app


def _routes(path: str, method: str) -> list[APIRoute]:
    return [
        route
        for route in app.routes
        if isinstance(route, APIRoute) and route.path == path and method in route.methods
    ]


def test_plan_routes_registered_once() -> None:
    assert len(_routes("/plans", "POST")) == 1
    assert len(_routes("/plans/preview", "POST")) == 1
    assert len(_routes("/plans/latest", "GET")) == 1


def test_latest_route_not_shadowed_by_plan_lookup() -> None:
    paths = [route.path for route in app.routes if isinstance(route, APIRoute) and "GET" in route.methods]

    assert paths.index("/plans/latest") < paths.index("/plans/{plan_id}")
