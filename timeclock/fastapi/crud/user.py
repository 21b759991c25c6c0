"""
User CRUD operations.

This module provides database operations for user accounts: creation by
an administrator, self-service profile updates and lookups.
"""

import logging
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from timeclock.fastapi.core.exceptions import ConflictError, NotFoundError
from timeclock.fastapi.models.user import User
from timeclock.fastapi.schemas.user import UserCreate, UserProfileUpdate

logger = logging.getLogger(__name__)


class UserCRUD:
    """CRUD operations for User model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_user(self, user_data: UserCreate) -> User:
        """
        Create a new user account.

        Args:
            user_data: User creation data

        Returns:
            Created User instance

        Raises:
            ConflictError: If the email is already registered
        """
        if self.get_user_by_email(user_data.email):
            raise ConflictError("Email already registered")

        db_user = User(**user_data.model_dump())
        self.db.add(db_user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered")
        self.db.refresh(db_user)

        logger.info("Created user %s (admin=%s)", db_user.id, db_user.is_admin)
        return db_user

    def get_user(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User UUID

        Returns:
            User instance or None if not found
        """
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email, or None."""
        return self.db.query(User).filter(User.email == email).first()

    def get_users(self, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[User]:
        """
        Get list of users with pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            include_inactive: Whether to include deactivated accounts

        Returns:
            List of User instances ordered by name
        """
        query = self.db.query(User)

        if not include_inactive:
            query = query.filter(User.is_active == True)

        return query.order_by(User.last_name, User.first_name).offset(skip).limit(limit).all()

    def update_profile(self, user_id: UUID, profile: UserProfileUpdate) -> User:
        """
        Update a user's own profile fields.

        Args:
            user_id: User UUID
            profile: New profile values

        Returns:
            Updated User instance

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new email belongs to another user
        """
        db_user = self.get_user(user_id)
        if not db_user:
            raise NotFoundError("User not found")

        existing = self.get_user_by_email(profile.email)
        if existing and existing.id != db_user.id:
            raise ConflictError("Email already registered")

        for field, value in profile.model_dump().items():
            setattr(db_user, field, value)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Email already registered")
        self.db.refresh(db_user)

        return db_user

    def count_users(self) -> int:
        """Count active user accounts."""
        return self.db.query(User).filter(User.is_active == True).count()

    def count_admins(self) -> int:
        """Count active administrator accounts."""
        return self.db.query(User).filter(User.is_admin == True, User.is_active == True).count()


# Convenience functions
def create_user(db: Session, user_data: UserCreate) -> User:
    """Create a new user."""
    return UserCRUD(db).create_user(user_data)


def get_user(db: Session, user_id: UUID) -> Optional[User]:
    """Get user by ID."""
    return UserCRUD(db).get_user(user_id)


def get_users(db: Session, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[User]:
    """Get list of users."""
    return UserCRUD(db).get_users(skip=skip, limit=limit, include_inactive=include_inactive)


def update_profile(db: Session, user_id: UUID, profile: UserProfileUpdate) -> User:
    """Update a user's profile."""
    return UserCRUD(db).update_profile(user_id, profile)
