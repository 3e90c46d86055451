from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import pytest
from fastapi.routing import APIRoute

from roombook.main import app

EXPECTED_ROUTES: dict[str, set[str]] = {
    "/reservations": {"get", "post"},
    "/reservations/{reservation_id}": {"get", "put", "delete"},
    "/reservations/{reservation_id}/cancel": {"post"},
    "/rooms": {"get", "post"},
    "/rooms/available": {"get"},
    "/rooms/{room_id}": {"get", "put"},
    "/requesters": {"get", "post"},
    "/requesters/{requester_id}": {"get", "put"},
}


def _normalize_http_methods(methods: Iterable[str]) -> set[str]:
    return {m.lower() for m in methods}


def _is_public_api_route(route: APIRoute) -> bool:
    # Exclude docs/openapi endpoints if they exist
    return not route.path.startswith(("/docs", "/redoc", "/openapi"))


def test_openapi_paths_and_methods_match_the_contract() -> None:
    spec = app.openapi()
    paths: dict[str, Any] = spec.get("paths", {})

    actual = {
        path: {k for k in item.keys() if k in {"get", "post", "put", "patch", "delete"}}
        for path, item in paths.items()
    }
    assert actual == EXPECTED_ROUTES


def test_all_fastapi_routes_are_declared_in_openapi_paths() -> None:
    """
    Contract test: every public APIRoute must exist in the OpenAPI `paths` with the same methods.
    """
    paths: dict[str, Any] = app.openapi().get("paths", {})

    api_routes = [r for r in app.routes if isinstance(r, APIRoute) and _is_public_api_route(r)]
    assert api_routes, "No API routes found; is the router included in the app?"

    mismatches: list[str] = []
    for route in api_routes:
        methods = _normalize_http_methods(route.methods or set())
        methods.discard("head")
        declared = set(paths.get(route.path, {}).keys())
        if not methods <= declared:
            mismatches.append(f"{route.path}: fastapi={sorted(methods)} openapi={sorted(declared)}")

    assert not mismatches, "Method mismatches:\n" + "\n".join(mismatches)


@pytest.mark.parametrize("schema_name", ["Reservation", "ReservationRequest", "Room", "RoomIn", "Requester", "RequesterIn"])
def test_openapi_declares_expected_component_schemas(schema_name: str) -> None:
    schemas = app.openapi().get("components", {}).get("schemas", {})
    assert schema_name in schemas, f"Missing components.schemas.{schema_name} in OpenAPI"
