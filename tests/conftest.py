# tests/conftest.py
"""
Global pytest fixtures:

- An ErrorRouter per writer (plain text / JSON) with the same demo routes.
- TestClient bound directly to the routing table (it is an ASGI app).
"""

from __future__ import annotations

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from httperr.common.errors import new, with_status
from httperr.common.responses import json_error_writer, text_error_writer
from httperr.handlers.router import ErrorRouter

# ----------------------------
# Demo routes
# ----------------------------


def register_demo_routes(router: ErrorRouter) -> ErrorRouter:
    @router.route("GET /standard")
    def standard(sink, request):
        return RuntimeError("standard error")

    @router.route("GET /status")
    def status(sink, request):
        return new("custom error", 400)

    @router.route("GET /ok")
    def ok(sink, request):
        sink.write_header(200)
        sink.write("OK\n")
        return None

    @router.route("POST /items/{name}")
    async def create_item(sink, request):
        name = request.path_params["name"]
        if name == "taken":
            try:
                raise new(f"item {name} already exists", 409)
            except Exception as exc:
                wrapped = LookupError("create failed")
                wrapped.__cause__ = exc
                return wrapped
        sink.headers["Location"] = f"/items/{name}"
        sink.write_header(201)
        sink.write(name)
        return None

    @router.route("/greet")
    def greet(sink, request):
        name = request.query_params.get("name")
        if not name:
            return new("missing name", 400)
        if name == "nobody":
            return with_status(KeyError(name), 404)
        sink.write(f"hello {name}")
        return None

    return router


# ----------------------------
# Routing tables / clients
# ----------------------------


@pytest.fixture()
def text_router() -> ErrorRouter:
    return register_demo_routes(ErrorRouter(text_error_writer))


@pytest.fixture()
def json_router() -> ErrorRouter:
    return register_demo_routes(ErrorRouter(json_error_writer))


@pytest.fixture()
def client(text_router: ErrorRouter) -> Generator[TestClient, None, None]:
    with TestClient(text_router) as c:
        yield c


@pytest.fixture()
def json_client(json_router: ErrorRouter) -> Generator[TestClient, None, None]:
    with TestClient(json_router) as c:
        yield c
