"""
User model for employees and administrators.

This module defines the SQLAlchemy model for people who clock in and out.
Administrators are ordinary users with ``is_admin`` set.
"""

from datetime import datetime
from uuid import uuid4
from sqlalchemy import Column, String, DateTime, Boolean, Uuid
from sqlalchemy.orm import relationship

from timeclock.fastapi.core.utils import utcnow
from timeclock.fastapi.dependencies.database import Base


class User(Base):
    """
    User model for employees tracked by the time clock.

    Attributes:
        id: Unique identifier (UUID)
        first_name: Given name
        last_name: Family name
        email: Unique contact email
        phone: Phone number (optional)
        address: Postal address (optional)
        profile_image_url: URL of the profile picture in object storage
        is_admin: Whether the user can see all entries and system statistics
        is_active: Whether the account is active (counts as an employee)
        created_at: Account creation timestamp
        updated_at: Last account update timestamp
    """

    __tablename__ = "users"

    # Primary key
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        index=True,
        doc="Unique user identifier"
    )

    # Profile
    first_name = Column(String(100), nullable=True, doc="Given name")
    last_name = Column(String(100), nullable=True, doc="Family name")

    email = Column(
        String(255),
        unique=True,
        nullable=True,
        index=True,
        doc="Unique contact email"
    )

    phone = Column(String(30), nullable=True, doc="Phone number")
    address = Column(String(500), nullable=True, doc="Postal address")

    profile_image_url = Column(
        String(500),
        nullable=True,
        doc="Durable URL returned by the object storage upload"
    )

    # Roles and status
    is_admin = Column(
        Boolean,
        default=False,
        nullable=False,
        doc="Whether the user has administrator access"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        index=True,
        doc="Whether the user account is active"
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        doc="Account creation timestamp"
    )

    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc="Last account update timestamp"
    )

    # Relationships
    time_entries = relationship("TimeEntry", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email='{self.email}', admin={self.is_admin}, active={self.is_active})>"
