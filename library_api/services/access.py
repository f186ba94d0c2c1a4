"""
Permission and Role Services

Permissions
===========
Every protected route is guarded by a permission named after the action
and the route ("create-book", "delete-writer-by-list"). ROUTE_PERMISSIONS
lists all of them; create_default_permissions() inserts the missing ones
so a fresh database can be bootstrapped in one call.

Creating a permission also grants it to the Admin role, which is
created on the fly when it does not exist yet.

Roles
=====
A role is a named set of permissions given by id. Unknown ids are
rejected with 400. create_default_role() rebuilds the Admin role with
every permission in the datastore.
"""

import logging
from typing import Any

from fastapi import status
from sqlalchemy import select
from sqlalchemy.orm import Session

from library_api.models import ADMIN_ROLE_NAME, Permission, Role
from library_api.schemas.access import (
    DefaultPermissionsResponse,
    PermissionResponse,
    RoleResponse,
)
from library_api.services.resource import DATASTORE_ERRORS, ResourceService
from library_api.services.results import ServiceResult

logger = logging.getLogger(__name__)

# Resources managed through the six conventional routes
CRUD_RESOURCES = (
    "book",
    "writer",
    "publication",
    "subject",
    "translator",
    "pronouns",
    "permission",
    "role",
    "faq",
)

CRUD_ACTIONS = (
    "create-{}",
    "get-{}-list",
    "get-{}-by-id",
    "update-{}-by-id",
    "delete-{}-by-id",
    "delete-{}-by-list",
)

SPECIAL_PERMISSIONS = (
    "create-default-permission",
    "create-default-role",
    "create-lend",
    "create-return",
    "get-book-request-list",
    "get-book-history",
    "create-about-us",
    "delete-about-us",
    "create-terms-and-conditions",
    "delete-terms-and-conditions",
    "create-privacy-policy",
    "delete-privacy-policy",
)

ROUTE_PERMISSIONS: tuple[str, ...] = tuple(
    action.format(resource) for resource in CRUD_RESOURCES for action in CRUD_ACTIONS
) + SPECIAL_PERMISSIONS


def _admin_role(db: Session) -> Role:
    """The Admin role, added to the session when missing."""
    role = db.execute(
        select(Role).where(Role.name == ADMIN_ROLE_NAME)
    ).scalar_one_or_none()
    if role is None:
        role = Role(name=ADMIN_ROLE_NAME)
        db.add(role)
        logger.info("Admin role created")
    return role


class PermissionService(ResourceService[Permission]):
    """Permissions, kept in sync with the Admin role."""

    def __init__(self) -> None:
        super().__init__(Permission, PermissionResponse, label="permission")

    def _after_create(self, db: Session, instance: Permission) -> None:
        role = _admin_role(db)
        if instance not in role.permissions:
            role.permissions.append(instance)

    def create_default_permissions(
        self,
        db: Session,
        requester_id: str | None,
    ) -> ServiceResult:
        """Insert every route permission that does not exist yet."""
        try:
            existing = set(db.execute(select(Permission.name)).scalars())
            missing = [name for name in ROUTE_PERMISSIONS if name not in existing]

            if missing:
                role = _admin_role(db)
                for name in missing:
                    permission = Permission(name=name, created_by=requester_id)
                    db.add(permission)
                    role.permissions.append(permission)
                db.commit()
        except DATASTORE_ERRORS:
            db.rollback()
            logger.exception("Failed to create default permissions")
            return ServiceResult.internal_error("Failed to create default permissions.")

        payload = DefaultPermissionsResponse(created=missing, total=len(ROUTE_PERMISSIONS))
        if not missing:
            return ServiceResult.ok(payload, "All default permissions already exist.")

        logger.info(f"Created {len(missing)} default permissions")
        return ServiceResult.ok(
            payload,
            f"{len(missing)} default permissions created successfully.",
            status.HTTP_201_CREATED,
        )


class RoleService(ResourceService[Role]):
    """Roles, whose permission ids must all exist."""

    def __init__(self) -> None:
        super().__init__(Role, RoleResponse, label="role")

    def _prepare(
        self,
        db: Session,
        values: dict[str, Any],
        instance: Role | None = None,
    ) -> ServiceResult | None:
        permission_ids = values.get("permissions")
        if permission_ids is None:
            return None

        unique_ids = list(dict.fromkeys(permission_ids))
        found = {
            permission.id: permission
            for permission in db.execute(
                select(Permission).where(Permission.id.in_(unique_ids))
            ).scalars()
        }
        for permission_id in unique_ids:
            if permission_id not in found:
                logger.warning(f"Rejected role with unknown permission {permission_id}")
                return ServiceResult.fail(f"Invalid permission ID: {permission_id}.")

        values["permissions"] = [found[permission_id] for permission_id in unique_ids]
        return None

    def create_default_role(self, db: Session, requester_id: str | None) -> ServiceResult:
        """Create or refresh the Admin role so it holds every permission."""
        try:
            role = db.execute(
                select(Role).where(Role.name == ADMIN_ROLE_NAME)
            ).scalar_one_or_none()
            created = role is None

            if created:
                role = Role(name=ADMIN_ROLE_NAME, created_by=requester_id)
                db.add(role)
            else:
                role.updated_by = requester_id

            role.permissions = list(db.execute(select(Permission)).scalars())
            db.commit()
            db.refresh(role)
            payload = self.serialize(role)
        except DATASTORE_ERRORS:
            db.rollback()
            logger.exception("Failed to create default role")
            return ServiceResult.internal_error("Failed to create default role.")

        if created:
            logger.info(f"Default role created with {len(role.permissions)} permissions")
            return ServiceResult.ok(
                payload,
                "Default role created successfully.",
                status.HTTP_201_CREATED,
            )
        logger.info(f"Default role updated with {len(role.permissions)} permissions")
        return ServiceResult.ok(payload, "Default role updated successfully.")


permission_service = PermissionService()
role_service = RoleService()
