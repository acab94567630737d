"""
Page models.

Guarded pages answer with the page name and who is looking at it; the
storefront front end renders the rest.
"""

from typing import Optional
from pydantic import BaseModel

from modules.profiles.models import ProfileStatus, Role
from modules.routing.models import RouteGroup


class PageResponse(BaseModel):
    """A page the browser is allowed to see."""

    page: str
    group: RouteGroup
    user_id: Optional[str] = None
    role: Optional[Role] = None
    status: Optional[ProfileStatus] = None
