"""
Shared Schema Building Blocks

Conventions used by every resource schema module:

- Request DTOs inherit RequestModel: unknown fields are rejected, strings
  are stripped, and both camelCase ("isActive") and snake_case
  ("is_active") keys are accepted.
- Response models inherit ResponseModel: built from ORM objects
  (from_attributes) and serialised with camelCase keys.
- ObjectId is the 24 character hex identifier used for every record.
- ListQuery carries page/limit/sort plus the audit filters every list
  endpoint understands; resources add their own filters.
"""

import re
from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


def _check_object_id(value: str) -> str:
    value = value.lower()
    if not OBJECT_ID_PATTERN.fullmatch(value):
        raise ValueError("must be a valid 24 character hex id")
    return value


ObjectId = Annotated[str, AfterValidator(_check_object_id)]

# Validated as a URL, stored and returned as a plain string
UrlStr = Annotated[HttpUrl, AfterValidator(str)]


def split_csv(value: Any) -> Any:
    """Turn "a,b,c" (or ["a,b", "c"]) into ["a", "b", "c"]; other values pass through."""
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return [part for item in value for part in split_csv(item)]
    return value


# =============================================================================
# Base Models
# =============================================================================
class RequestModel(BaseModel):
    """Base for request bodies, query strings and path parameters."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class UpdateModel(RequestModel):
    """
    Base for partial updates.

    Every field is optional, but a field that is sent may only be null
    when it is listed in `nullable`.
    """

    nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def sent_fields_not_null(self) -> "UpdateModel":
        for field in sorted(self.model_fields_set):
            if getattr(self, field) is None and field not in self.nullable:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self


class ResponseModel(BaseModel):
    """Base for everything returned inside an envelope's data."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AuditResponse(ResponseModel):
    """Fields every catalogue record exposes."""

    id: str
    is_active: bool
    created_by: str | None = None
    updated_by: str | None = None
    created_at: datetime
    updated_at: datetime


# =============================================================================
# Path and Query Parameters
# =============================================================================
class IdParams(RequestModel):
    """Path parameters of /<resource>/{id} routes."""

    id: ObjectId


class IdListQuery(RequestModel):
    """Query string of DELETE /<resource>?ids=a,b,c"""

    ids: list[ObjectId] = Field(..., min_length=1)

    @field_validator("ids", mode="before")
    @classmethod
    def split_ids(cls, v: Any) -> Any:
        return split_csv(v)


class PageQuery(RequestModel):
    """
    Pagination and sorting.

    Subclasses add filters and may widen `sortable`.
    A sort value is a field name, prefixed with "-" for descending order.
    """

    sortable: ClassVar[tuple[str, ...]] = ("createdAt", "updatedAt", "name")

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    sort: str = Field(default="-createdAt")

    @field_validator("sort")
    @classmethod
    def sort_must_be_known(cls, v: str) -> str:
        if v.removeprefix("-") not in cls.sortable:
            raise ValueError(
                f"must be one of {', '.join(cls.sortable)}, "
                "optionally prefixed with '-'"
            )
        return v


class ListQuery(PageQuery):
    """PageQuery plus the audit filters every resource list understands."""

    is_active: bool | None = None
    created_by: str | None = None
    updated_by: str | None = None


class Page(ResponseModel):
    """Pagination metadata returned by list endpoints."""

    items: list[Any]
    total_items: int
    total_pages: int
    current_page: int
    page_size: int
    sort: str
