"""SQLAlchemy model for the roles table.

Roles bundle permissions and carry their own hierarchy level.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasklane.infrastructure.persistence.database import Base


class RoleModel(Base):
    """SQLAlchemy model for the roles table.

    Attributes:
        id: Primary key (UUID string).
        name: Unique role name.
        description: Optional description of the role's purpose.
        level: Hierarchy level, higher is more privileged.
    """

    __tablename__ = "roles"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Role ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Role name (e.g., 'admin', 'board_member')",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Hierarchy level (higher = more privileged)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    # Relationships
    permissions: Mapped[list["PermissionModel"]] = relationship(  # noqa: F821
        "PermissionModel",
        secondary="role_permissions",
        order_by="PermissionModel.name",
    )

    @property
    def permission_names(self) -> set[str]:
        """Names of the permissions granted by this role.

        Note: This requires the 'permissions' relationship to be loaded.
        """
        return {permission.name for permission in self.permissions}

    def __repr__(self) -> str:
        return f"<Role(id={self.id}, name={self.name}, level={self.level})>"
