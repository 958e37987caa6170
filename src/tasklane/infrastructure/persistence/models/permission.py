"""SQLAlchemy model for the permissions table.

Permissions are atomic ``resource:action`` capabilities granted to roles.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from tasklane.infrastructure.persistence.database import Base


class PermissionModel(Base):
    """SQLAlchemy model for the permissions table.

    Attributes:
        id: Primary key (UUID string).
        name: Globally unique permission name (e.g. 'boards:create').
        description: Human-readable description.
        created_at: Timestamp when the permission was created.
        updated_at: Timestamp when the permission was last updated.
    """

    __tablename__ = "permissions"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Permission ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Permission name (resource:action)",
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
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

    def __repr__(self) -> str:
        return f"<Permission(id={self.id}, name={self.name})>"
