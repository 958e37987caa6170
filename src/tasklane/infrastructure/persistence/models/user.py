"""SQLAlchemy model for the users table."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tasklane.infrastructure.persistence.database import Base


class UserModel(Base):
    """SQLAlchemy model for the users table.

    Users hold zero or more roles through the user_roles junction table.

    Attributes:
        id: Primary key (UUID string).
        email: Unique email address.
        name: Display name.
        password_hash: Hashed password (argon2).
        bio: Optional profile text.
        is_active: Whether the user can log in.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="User ID (UUID)",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address",
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hashed password (argon2)",
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether the user can log in",
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
    roles: Mapped[list["RoleModel"]] = relationship(  # noqa: F821
        "RoleModel",
        secondary="user_roles",
        order_by="RoleModel.name",
    )

    @property
    def role_names(self) -> set[str]:
        """Names of the roles the user holds.

        Note: This requires the 'roles' relationship to be loaded.
        """
        return {role.name for role in self.roles}

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
