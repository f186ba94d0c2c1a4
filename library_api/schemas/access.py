"""
Permission and Role Pydantic Schemas

Permission names follow the "action-route" convention: lowercase words
joined by hyphens, at least two of them ("create-book",
"delete-writer-by-list").
"""

from pydantic import Field

from library_api.schemas.common import (
    AuditResponse,
    ListQuery,
    ObjectId,
    RequestModel,
    ResponseModel,
    UpdateModel,
)

PERMISSION_NAME_PATTERN = r"^[a-z]+(-[a-z]+)+$"


# =============================================================================
# Permissions
# =============================================================================
class PermissionCreate(RequestModel):
    name: str = Field(
        ...,
        min_length=3,
        max_length=100,
        pattern=PERMISSION_NAME_PATTERN,
        examples=["create-book", "get-writer-list"],
    )
    is_active: bool = Field(default=True)


class PermissionUpdate(UpdateModel):
    name: str | None = Field(
        default=None,
        min_length=3,
        max_length=100,
        pattern=PERMISSION_NAME_PATTERN,
    )
    is_active: bool | None = None


class PermissionListQuery(ListQuery):
    name: str | None = Field(default=None, max_length=100)


class PermissionResponse(AuditResponse):
    name: str


class PermissionSummary(ResponseModel):
    id: str
    name: str


class DefaultPermissionsResponse(ResponseModel):
    created: list[str]
    total: int


# =============================================================================
# Roles
# =============================================================================
class RoleCreate(RequestModel):
    """A role bundles permissions, given by id."""

    name: str = Field(..., min_length=3, max_length=50, examples=["Librarian"])
    permissions: list[ObjectId] = Field(default_factory=list)
    is_active: bool = Field(default=True)


class RoleUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=3, max_length=50)
    permissions: list[ObjectId] | None = None
    is_active: bool | None = None


class RoleListQuery(ListQuery):
    name: str | None = Field(default=None, max_length=50)


class RoleResponse(AuditResponse):
    name: str
    permissions: list[PermissionSummary] = Field(default_factory=list)


class RoleSummary(ResponseModel):
    id: str
    name: str
