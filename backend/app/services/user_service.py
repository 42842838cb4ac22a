"""
User Service - Business Logic Layer
Handles user accounts: creation, lookup, profile updates and removal.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import BadRequestError, NotFoundError
from app.core.security import hash_password
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


logger = logging.getLogger(__name__)


class UserService:
    """
    Service class for user-related business logic.

    Args:
        db: Database session for the current request
    """

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, data: UserCreate) -> User:
        """
        Create a new user account.

        Hashes the password before storing it.

        Raises:
            BadRequestError: If the email is already registered
        """
        email = data.email.lower()
        if self.find_by_email(email):
            raise BadRequestError("Email already registered")

        user = User(
            name=data.name.strip(),
            email=email,
            password_hash=hash_password(data.password),
            avatar=data.avatar,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent registration with the same email
            self.db.rollback()
            raise BadRequestError("Email already registered")

        self.db.refresh(user)
        logger.info(f"User {user.id} created")
        return user

    def find_one_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID, None if it doesn't exist."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user(self, user_id: UUID) -> User:
        """
        Get user by ID.

        Raises:
            NotFoundError: If the user doesn't exist
        """
        user = self.find_one_by_id(user_id)
        if not user:
            raise NotFoundError("User not found", {"user_id": str(user_id)})
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        """
        Update user profile.

        Only updates fields that are provided in data.
        """
        user = self.get_user(user_id)

        update_data = data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] is not None:
            update_data["name"] = update_data["name"].strip()
        for field, value in update_data.items():
            setattr(user, field, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: UUID) -> str:
        """
        Delete a user row.

        Projects must be removed first through ProjectService so their files
        are cleaned up; categories the user created are kept without owner.
        """
        user = self.get_user(user_id)
        name = user.name
        self.db.delete(user)
        self.db.commit()
        logger.info(f"User {user_id} deleted")
        return f"User {name} has deleted"

    def list_avatar_paths(self) -> set[str]:
        """Avatars stored as local paths; URLs point elsewhere and are skipped."""
        rows = self.db.query(User.avatar).filter(User.avatar.isnot(None)).all()
        return {row.avatar for row in rows if "://" not in row.avatar}
