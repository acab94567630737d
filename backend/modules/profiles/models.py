"""
Profile module data models.

A profile is the storefront's own row for an auth user: contact details
plus the role and status that drive routing. The local projections
(pending signup data, remembered user data) are defined here as well.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator


class Role(str, Enum):
    """Role of a profile. Only ``customer`` is self-service."""

    CUSTOMER = "customer"
    STAFF = "staff"
    MANAGER = "manager"
    ADMIN = "admin"


class ProfileStatus(str, Enum):
    """Account status of a profile."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


def coerce_role(value: Any) -> Role:
    """Map any stored or missing role to a Role, defaulting to customer."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        return Role.CUSTOMER


def coerce_status(value: Any) -> ProfileStatus:
    """Map any stored status to a ProfileStatus; unknown values are inactive."""
    if isinstance(value, ProfileStatus):
        return value
    if value is None:
        return ProfileStatus.ACTIVE
    try:
        return ProfileStatus(str(value).strip().lower())
    except ValueError:
        return ProfileStatus.INACTIVE


class Profile(BaseModel):
    """
    A row of the ``users`` table.

    ``id`` equals the auth user id and never changes.
    """

    id: str = Field(..., description="Auth user ID (UUID)")
    email: str = Field(default="", description="Email address")
    firstname: str = Field(default="User", description="First name")
    lastname: str = Field(default="", description="Last name")
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    zipcode: Optional[str] = Field(None, description="Postal code")
    role: Role = Field(default=Role.CUSTOMER, description="Profile role")
    status: ProfileStatus = Field(default=ProfileStatus.ACTIVE, description="Account status")
    created_at: Optional[datetime] = Field(None, description="Row creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")

    model_config = {"extra": "ignore"}

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> Role:
        return coerce_role(value)

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> ProfileStatus:
        return coerce_status(value)

    @field_validator("firstname", "lastname", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_row(self) -> dict[str, Any]:
        """Serialize for an insert/upsert into the ``users`` table."""
        return self.model_dump(mode="json", exclude_none=True)


class PendingSignup(BaseModel):
    """
    Signup form data kept across an OAuth redirect.

    Empty strings are normalized to ``None`` so that a blank form field
    never wins over provider metadata.
    """

    firstname: Optional[str] = None
    lastname: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    zipcode: Optional[str] = None

    model_config = {"extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class CachedUserData(BaseModel):
    """Minimal projection of a profile remembered in the browser."""

    id: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    email: str
    role: Role
    status: ProfileStatus

    model_config = {"extra": "ignore"}

    @classmethod
    def from_profile(cls, profile: Profile) -> "CachedUserData":
        return cls(
            id=profile.id,
            firstname=profile.firstname or None,
            lastname=profile.lastname or None,
            email=profile.email,
            role=profile.role,
            status=profile.status,
        )

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.firstname, self.lastname) if p]
        return " ".join(parts) if parts else self.email
