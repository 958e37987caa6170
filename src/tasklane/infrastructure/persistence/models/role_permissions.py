"""SQLAlchemy model for the role_permissions junction table.

Implements the many-to-many relationship between roles and permissions.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tasklane.infrastructure.persistence.database import Base


class RolePermissionsModel(Base):
    """Junction table between roles and permissions.

    The composite primary key rules out duplicate grants.

    Attributes:
        role_id: Foreign key to roles table.
        permission_id: Foreign key to permissions table.
    """

    __tablename__ = "role_permissions"

    role_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Foreign key to roles table",
    )
    permission_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
        comment="Foreign key to permissions table",
    )

    def __repr__(self) -> str:
        return f"<RolePermissions(role_id={self.role_id}, permission_id={self.permission_id})>"
