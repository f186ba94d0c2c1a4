"""
Permission and Role Routers

Both resources are admin only: unlike the catalogue, reading them needs
a permission too. Each has one extra route that bootstraps defaults:

    POST /permissions/default   insert every missing route permission
    POST /roles/default         (re)build the Admin role with all of them
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from library_api.config import get_settings
from library_api.dependencies import DbSession, RequirePermission
from library_api.models import User
from library_api.responses import envelope_response
from library_api.routers.resource import build_resource_router
from library_api.schemas.access import (
    PermissionCreate,
    PermissionListQuery,
    PermissionUpdate,
    RoleCreate,
    RoleListQuery,
    RoleUpdate,
)
from library_api.services.access import permission_service, role_service
from library_api.services.rate_limiter import limiter

settings = get_settings()

permissions_router = build_resource_router(
    permission_service,
    resource="permission",
    create_schema=PermissionCreate,
    update_schema=PermissionUpdate,
    list_schema=PermissionListQuery,
    prefix="/permissions",
    tags=["Permissions"],
)

roles_router = build_resource_router(
    role_service,
    resource="role",
    create_schema=RoleCreate,
    update_schema=RoleUpdate,
    list_schema=RoleListQuery,
    prefix="/roles",
    tags=["Roles"],
)


@permissions_router.post(
    "/default",
    summary="Create default permissions",
    description="Insert every route permission that does not exist yet. "
    "Returns 201 with the created names, or 200 when none were missing.",
)
@limiter.limit(settings.rate_limit_write)
def create_default_permissions(
    request: Request,
    db: DbSession,
    user: Annotated[User, Depends(RequirePermission("create-default-permission"))],
) -> JSONResponse:
    return envelope_response(request, permission_service.create_default_permissions(db, user.id))


@roles_router.post(
    "/default",
    summary="Create the default Admin role",
    description="Create the Admin role, or reset it, holding every permission.",
)
@limiter.limit(settings.rate_limit_write)
def create_default_role(
    request: Request,
    db: DbSession,
    user: Annotated[User, Depends(RequirePermission("create-default-role"))],
) -> JSONResponse:
    return envelope_response(request, role_service.create_default_role(db, user.id))
