"""
User Model
Represents the authors of the portfolio.

Each user has:
- Unique email used as login identifier
- Bcrypt password hash (never stored in plain text)
- Display name and avatar shown next to their projects

A user owns the categories they created and the projects they authored.
"""

import enum

from sqlalchemy import Column, String, Enum as SQLEnum
from sqlalchemy.orm import relationship

from app.models.base import BaseModel


class UserRole(str, enum.Enum):
    """User role types."""
    ADMIN = "admin"
    BASIC = "basic"


class User(BaseModel):
    """
    User model for authorship and profile information.

    Fields:
        id (UUID): Primary key, inherited from BaseModel
        name (str): Display name shown on project cards
        email (str): Unique email address for login
        password_hash (str): Bcrypt hashed password
        avatar (str): Path or URL of the profile picture
        role (UserRole): admin or basic, set by operators only
        created_at (datetime): Account creation timestamp
        updated_at (datetime): Last profile update timestamp

    Relationships:
        categories: Categories created by this user
        projects: Projects authored by this user
    """

    __tablename__ = "users"

    name = Column(
        String(255),
        nullable=False,
        comment="User's display name"
    )

    # Email must be unique across all users for login purposes
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User's email address for authentication"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    avatar = Column(
        String(500),
        nullable=True,
        comment="Path or URL of the user's profile picture"
    )

    # ADMIN may run maintenance endpoints such as the media cleanup
    role = Column(
        SQLEnum(UserRole),
        default=UserRole.BASIC,
        nullable=False,
        comment="User role (admin, basic)"
    )

    # Relationships
    categories = relationship("Category", back_populates="user")
    projects = relationship("Project", back_populates="author", passive_deletes=True)

    def __repr__(self):
        """String representation for debugging."""
        return f"<User(id={self.id}, email={self.email}, name={self.name})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
