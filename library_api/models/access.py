"""
Access Control Models

Permissions and roles decide which users may call protected routes.

- Permission: a named capability in "action-route" form, e.g.
  "create-book", "get-permission-list", "delete-writer-by-list".
- Role: a named bundle of permissions. Users reference at most one role.

The "Admin" role is special only by convention: creating a permission
grants it to Admin, and the default-role operation rebuilds Admin with
every permission.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from library_api.database import Base
from library_api.models.base import ID_LENGTH, AuditMixin

if TYPE_CHECKING:
    from library_api.models.user import User

ADMIN_ROLE_NAME = "Admin"


role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column(
        "role_id",
        String(ID_LENGTH),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String(ID_LENGTH),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Permission(AuditMixin, Base):
    """Permission model. Table: permissions"""

    __tablename__ = "permissions"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False,
        comment="Capability name in action-route form"
    )

    roles: Mapped[List["Role"]] = relationship(
        "Role",
        secondary=role_permissions,
        back_populates="permissions",
    )

    def __repr__(self) -> str:
        return f"Permission(id={self.id}, name='{self.name}')"


class Role(AuditMixin, Base):
    """
    Role model.

    Table: roles

    Relationships:
    - permissions: Many-to-Many through role_permissions
    - users: One-to-Many (User.role_id)
    """

    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Role name, e.g. 'Admin', 'Librarian'"
    )

    permissions: Mapped[List[Permission]] = relationship(
        Permission,
        secondary=role_permissions,
        back_populates="roles",
        lazy="selectin",
    )

    users: Mapped[List["User"]] = relationship(
        "User",
        back_populates="role",
        foreign_keys="User.role_id",
    )

    @property
    def permission_names(self) -> set[str]:
        return {permission.name for permission in self.permissions}

    def __repr__(self) -> str:
        return f"Role(id={self.id}, name='{self.name}')"
