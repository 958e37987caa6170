"""SQLAlchemy model for the user_roles junction table.

Implements the many-to-many relationship between users and roles.
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tasklane.infrastructure.persistence.database import Base


class UserRolesModel(Base):
    """Junction table between users and roles.

    The composite primary key rules out duplicate memberships.

    Attributes:
        user_id: Foreign key to users table.
        role_id: Foreign key to roles table.
    """

    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        comment="Foreign key to users table",
    )
    role_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("roles.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
        comment="Foreign key to roles table",
    )

    def __repr__(self) -> str:
        return f"<UserRoles(user_id={self.user_id}, role_id={self.role_id})>"
