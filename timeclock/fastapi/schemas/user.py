"""
Pydantic schemas for User profile validation and serialization.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import Field, field_validator

from timeclock.fastapi.schemas.common import CamelModel, as_utc

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class UserProfileUpdate(CamelModel):
    """Schema for a user updating their own profile."""

    first_name: str = Field(..., min_length=1, max_length=100, description="First name")
    last_name: str = Field(..., min_length=1, max_length=100, description="Last name")
    email: str = Field(
        ...,
        max_length=255,
        pattern=EMAIL_PATTERN,
        description="Contact email",
        examples=["jane.doe@example.com"]
    )
    phone: Optional[str] = Field(
        None,
        max_length=30,
        pattern=r"^[+]?[0-9\s\-\(\)]+$",
        description="Phone number (optional)",
        examples=["+1-555-0123", "(555) 123-4567"]
    )
    address: Optional[str] = Field(None, max_length=500, description="Postal address (optional)")

    @field_validator("phone", "address", mode="before")
    @classmethod
    def empty_string_to_none(cls, v):
        """Convert empty strings to None for optional fields."""
        return _blank_to_none(v)


class UserCreate(UserProfileUpdate):
    """Schema for an administrator creating a user account."""

    is_admin: bool = Field(default=False, description="Grant administrator access")
    is_active: bool = Field(default=True, description="Whether the account should be active")


class UserRead(CamelModel):
    """Schema for reading user information."""

    id: UUID = Field(..., description="User unique identifier")
    first_name: Optional[str] = Field(None, description="First name")
    last_name: Optional[str] = Field(None, description="Last name")
    email: Optional[str] = Field(None, description="Contact email")
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, description="Postal address")
    profile_image_url: Optional[str] = Field(None, description="Profile picture URL")
    is_admin: bool = Field(..., description="Whether the user is an administrator")
    is_active: bool = Field(..., description="Whether the account is active")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last account update timestamp")

    @field_validator("created_at", "updated_at")
    @classmethod
    def mark_utc(cls, v):
        return as_utc(v)
