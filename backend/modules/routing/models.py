"""
Routing module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.profiles.models import ProfileStatus, Role


class RouteGroup(str, Enum):
    """Access class of a page."""

    PUBLIC = "public"        # reachable without a session
    CUSTOMER = "customer"    # requires an active session
    ELEVATED = "elevated"    # requires an active staff/manager/admin profile


class GuardDecision(BaseModel):
    """Outcome of checking one path for the current browser."""

    path: str
    group: RouteGroup
    allowed: bool
    redirect_to: Optional[str] = Field(None, description="Corrective destination when not allowed")
    user_id: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[ProfileStatus] = None

    model_config = {"frozen": True}
