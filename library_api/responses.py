"""
Response Envelope

Every response of the API, success or failure, has the same JSON body:

    {
        "route": "/api/v1/subjects?page=2",
        "timestamp": "2024-05-01T10:00:00.000000+00:00",
        "success": true,
        "data": {...},
        "message": "2 subjects fetched successfully.",
        "status": 200
    }

envelope_response() is the single place that writes it. Route handlers
pass the ServiceResult they got from a service; exception handlers pass
ServiceResult.fail(...).
"""

from collections.abc import Iterable
from re import Pattern

from fastapi import APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.routing import compile_path

from library_api.services.results import ServiceResult


def request_route(request: Request) -> str:
    """Path and query string the client called."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


def envelope_response(
    request: Request,
    result: ServiceResult,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """
    Translate a ServiceResult into the HTTP response.

    The envelope's status doubles as the HTTP status code. Pydantic
    models inside data are serialised with their camelCase aliases.
    """
    return JSONResponse(
        status_code=result.status,
        content=jsonable_encoder(result.envelope(request_route(request))),
        headers=headers,
    )


def error_response(
    request: Request,
    message: str,
    status_code: int,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return envelope_response(request, ServiceResult.fail(message, status_code), headers)


def index_route_methods(
    routers: Iterable[APIRouter],
    prefix: str = "",
) -> list[tuple[Pattern[str], frozenset[str]]]:
    """
    Path pattern and HTTP methods of every route of the given routers.

    Built once when the routers are included, since included routers are
    not guaranteed to keep their routes as flat top-level entries.
    """
    index = []
    for router in routers:
        for route in router.routes:
            methods = getattr(route, "methods", None)
            if methods:
                path_regex, _, _ = compile_path(prefix + route.path)
                index.append((path_regex, frozenset(methods)))
    return index


def allowed_methods(request: Request, allow_header: str | None = None) -> list[str]:
    """
    Every HTTP method registered for the requested path.

    Starlette only reports the methods of the first route it matched;
    resources register GET, POST and DELETE on the same path as separate
    routes, so the full list is collected from app.state.route_methods.
    """
    methods: set[str] = set()
    if allow_header:
        methods.update(m.strip() for m in allow_header.split(",") if m.strip())

    path = request.url.path
    for path_regex, route_methods in getattr(request.app.state, "route_methods", []):
        if path_regex.match(path):
            methods.update(route_methods)
    return sorted(methods)
