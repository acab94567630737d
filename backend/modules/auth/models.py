"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.profiles.models import PendingSignup


class AuthChangeEvent(str, Enum):
    """Events emitted by the Supabase auth client."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class OAuthProvider(str, Enum):
    """OAuth providers enabled for the storefront."""

    GOOGLE = "google"
    GITHUB = "github"

    @property
    def query_params(self) -> dict[str, str]:
        """Extra authorize-URL parameters sent to the provider."""
        if self is OAuthProvider.GOOGLE:
            # Ask for a refresh token and always show the consent screen
            return {"access_type": "offline", "prompt": "consent"}
        return {}


class SignupForm(BaseModel):
    """Customer signup form as submitted by the browser."""

    email: str = Field(default="", description="Email address")
    firstname: str = Field(default="", description="First name")
    lastname: str = Field(default="", description="Last name")
    phone: Optional[str] = Field(None, description="Phone number")
    address: Optional[str] = Field(None, description="Street address")
    city: Optional[str] = Field(None, description="City")
    zipcode: Optional[str] = Field(None, description="Postal code")
    accept_terms: bool = Field(default=False, description="Terms & Conditions accepted")

    def to_pending(self) -> PendingSignup:
        """Fields kept across an OAuth redirect."""
        return PendingSignup(
            firstname=self.firstname,
            lastname=self.lastname,
            phone=self.phone,
            address=self.address,
            city=self.city,
            zipcode=self.zipcode,
        )

    def to_user_metadata(self) -> dict[str, Optional[str]]:
        """Fields attached to the auth user when signing up by magic link."""
        return {
            "firstname": self.firstname.strip(),
            "lastname": self.lastname.strip(),
            "phone": self.phone or None,
            "address": self.address or None,
            "city": self.city or None,
            "zipcode": self.zipcode or None,
            "role": "customer",
        }


class LoginRequest(BaseModel):
    """Request a sign-in magic link."""

    email: str = Field(..., description="Email address")
    remember: Optional[bool] = Field(None, description="Remember this browser; defaults to REMEMBER_ME_DEFAULT")


class MagicLinkResponse(BaseModel):
    """Acknowledgement that a magic link was sent."""

    message: str
    email: str


class OAuthStartResponse(BaseModel):
    """Provider authorize URL the browser should navigate to."""

    url: str
    provider: OAuthProvider
