"""
User-related endpoints.

Provides the signed-in browser's own user projection and, for staff with
dashboard access, the user list.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.profiles.models import CachedUserData, Profile, ProfileStatus, Role
from modules.routing.policy import destination_for_profile, has_elevated_access
from shared.exceptions import AuthorizationError
from ..dependencies import BrowserContext, get_browser_context
from ..middleware.auth import get_current_user

router = APIRouter()


class UserProfileResponse(BaseModel):
    """Current user response model."""

    id: str
    email: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    full_name: str
    role: Role
    status: ProfileStatus
    dashboard_access: bool
    home: str


class UserSummary(BaseModel):
    """One row of the dashboard user list."""

    id: str
    email: str
    firstname: str
    lastname: str
    phone: Optional[str] = None
    role: Role
    status: ProfileStatus
    city: Optional[str] = None
    zipcode: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_profile(cls, profile: Profile) -> "UserSummary":
        return cls(**profile.model_dump(include=set(cls.model_fields)))


@router.get("", response_model=list[UserSummary])
async def list_users(
    user: CachedUserData = Depends(get_current_user),
    context: BrowserContext = Depends(get_browser_context),
) -> list[UserSummary]:
    """
    List all users.

    Only active staff with dashboard access may call this.
    """
    if not has_elevated_access(user.role, user.status):
        raise AuthorizationError(
            "Dashboard access required",
            code="ELEVATED_ACCESS_REQUIRED",
        )

    return [UserSummary.from_profile(p) for p in context.profile_repository.list_users()]


@router.get("/me", response_model=UserProfileResponse)
async def get_current_user_profile(
    user: CachedUserData = Depends(get_current_user),
) -> UserProfileResponse:
    """
    Get the current user's profile.

    Requires a signed-in browser.
    """
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        firstname=user.firstname,
        lastname=user.lastname,
        full_name=user.full_name,
        role=user.role,
        status=user.status,
        dashboard_access=has_elevated_access(user.role, user.status),
        home=destination_for_profile(user.role, user.status),
    )
