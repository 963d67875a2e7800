"""
Pydantic models for marketplace users.

A user is a farmer, a buyer or a service provider.  The role is chosen
at registration and cannot be changed afterwards, so ``UserUpdate``
has no ``role`` field.  ``UserRead`` is the stored record, password
included; the API only ever returns ``UserPublic``.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, reject_null


class UserRole(str, Enum):
    FARMER = "farmer"
    BUYER = "buyer"
    SERVICE_PROVIDER = "service_provider"


class UserBase(CamelModel):
    username: str = Field(..., min_length=1, examples=["sharma_farms"])
    email: str = Field(..., min_length=3, examples=["sharma@example.com"])
    phone: Optional[str] = Field(None, examples=["9876543210"])
    full_name: str = Field(..., min_length=1, examples=["Sharma Organic Farms"])
    role: UserRole = Field(..., examples=["farmer"])
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    profile_image: Optional[str] = None
    bio: Optional[str] = None


class UserCreate(UserBase):
    """Schema for registering a user."""

    password: str = Field(..., min_length=1)


class UserUpdate(CamelModel):
    """Partial update of a user; only supplied fields are changed."""

    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    full_name: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    profile_image: Optional[str] = None
    bio: Optional[str] = None

    @field_validator("username", "password", "email", "full_name")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class UserRead(UserBase):
    """A stored user record, as returned by the storage layer."""

    id: int
    password: str


class UserPublic(UserBase):
    """A user as exposed through the API (no password)."""

    id: int


class UserLogin(CamelModel):
    # Both optional so a missing field is answered with 400 rather than 422.
    username: Optional[str] = None
    password: Optional[str] = None
