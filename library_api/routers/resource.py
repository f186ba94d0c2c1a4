"""
Resource Router Factory

Every catalogue resource exposes the same six routes:

    POST   /<resource>              create                201 / 400 / 409
    GET    /<resource>              paginated list        200
    DELETE /<resource>?ids=a,b,c    delete a list of ids  200
    GET    /<resource>/{id}         fetch one             200 / 404
    PUT    /<resource>/{id}         partial update        200 / 400 / 404 / 409
    DELETE /<resource>/{id}         delete one            200 / 404

build_resource_router() wires them for a ResourceService. Each route
checks its permission ("create-book", "get-book-list", ...), validates
its request parts, calls the service and wraps the result in the
envelope. Handlers hold no logic of their own.

Reads of public resources (the catalogue shown to visitors) skip the
permission check with public_read=True.
"""

from collections.abc import Callable
from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from library_api.config import get_settings
from library_api.dependencies import DbSession, RequirePermission
from library_api.models import User
from library_api.responses import envelope_response
from library_api.schemas.common import IdListQuery, IdParams
from library_api.services.rate_limiter import limiter
from library_api.services.resource import ResourceService
from library_api.validation import RequestPart, ValidatedRequest, validate_request

settings = get_settings()

F = TypeVar("F", bound=Callable[..., Any])


def _endpoint_name(name: str) -> Callable[[F], F]:
    """
    Give a generated handler its own name.

    FastAPI derives route names and operation ids from it, and slowapi
    keys its counters on it, so handlers of different resources must
    not share one.
    """

    def rename(func: F) -> F:
        func.__name__ = func.__qualname__ = name
        return func

    return rename


def build_resource_router(
    service: ResourceService[Any],
    *,
    resource: str,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    list_schema: type[BaseModel],
    prefix: str = "",
    tags: list[str] | None = None,
    public_read: bool = False,
) -> APIRouter:
    """
    Register the six conventional routes of a resource.

    Args:
        service: Service the handlers delegate to
        resource: Singular name used in permission names ("book")
        create_schema / update_schema / list_schema: Request DTOs
        prefix, tags: Passed to the new APIRouter
        public_read: Let anyone list and fetch records

    Returns:
        The router holding the routes
    """
    router = APIRouter(prefix=prefix, tags=tags)

    def guard(permission: str) -> list[Any]:
        return [] if public_read else [Depends(RequirePermission(permission))]

    title = service.title

    @router.post(
        "",
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {service.label}",
    )
    @limiter.limit(settings.rate_limit_write)
    @_endpoint_name(f"create_{resource}")
    def create(
        request: Request,
        db: DbSession,
        user: Annotated[User, Depends(RequirePermission(f"create-{resource}"))],
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((create_schema, RequestPart.BODY))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, service.create(db, user.id, payload.body))

    @router.get(
        "",
        summary=f"List {service.plural}",
        dependencies=guard(f"get-{resource}-list"),
    )
    @limiter.limit(settings.rate_limit_default)
    @_endpoint_name(f"list_{resource}")
    def list_records(
        request: Request,
        db: DbSession,
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((list_schema, RequestPart.QUERY))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, service.list(db, payload.query))

    @router.delete(
        "",
        summary=f"Delete a list of {service.plural}",
        dependencies=[Depends(RequirePermission(f"delete-{resource}-by-list"))],
    )
    @limiter.limit(settings.rate_limit_write)
    @_endpoint_name(f"delete_{resource}_list")
    def delete_many(
        request: Request,
        db: DbSession,
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((IdListQuery, RequestPart.QUERY))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, service.delete_many(db, payload.query.ids))

    @router.get(
        "/{id}",
        summary=f"{title} by id",
        dependencies=guard(f"get-{resource}-by-id"),
    )
    @limiter.limit(settings.rate_limit_default)
    @_endpoint_name(f"get_{resource}")
    def get_one(
        request: Request,
        db: DbSession,
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((IdParams, RequestPart.PARAMS))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, service.get_by_id(db, payload.params.id))

    @router.put(
        "/{id}",
        summary=f"Update a {service.label}",
    )
    @limiter.limit(settings.rate_limit_write)
    @_endpoint_name(f"update_{resource}")
    def update(
        request: Request,
        db: DbSession,
        user: Annotated[User, Depends(RequirePermission(f"update-{resource}-by-id"))],
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request(
                (IdParams, RequestPart.PARAMS),
                (update_schema, RequestPart.BODY),
            )),
        ],
    ) -> JSONResponse:
        result = service.update(db, user.id, payload.params.id, payload.body)
        return envelope_response(request, result)

    @router.delete(
        "/{id}",
        summary=f"Delete a {service.label}",
        dependencies=[Depends(RequirePermission(f"delete-{resource}-by-id"))],
    )
    @limiter.limit(settings.rate_limit_write)
    @_endpoint_name(f"delete_{resource}")
    def delete_one(
        request: Request,
        db: DbSession,
        payload: Annotated[
            ValidatedRequest,
            Depends(validate_request((IdParams, RequestPart.PARAMS))),
        ],
    ) -> JSONResponse:
        return envelope_response(request, service.delete_one(db, payload.params.id))

    return router
