"""
Page and API access dependencies.

Pages are guarded by the role router: a browser that may not see a page
is redirected (303) to where it belongs. API endpoints answer 401 instead.
"""

from fastapi import Depends, HTTPException, Request, status

from modules.profiles.models import CachedUserData
from modules.routing.models import GuardDecision

from ..dependencies import BrowserContext, get_browser_context


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
        )


class RouteRedirect(HTTPException):
    """Send the browser somewhere else instead of rendering the page."""
    def __init__(self, location: str):
        super().__init__(
            status_code=status.HTTP_303_SEE_OTHER,
            detail=f"Redirecting to {location}",
            headers={"Location": location},
        )


async def require_page_access(
    request: Request,
    context: BrowserContext = Depends(get_browser_context),
) -> GuardDecision:
    """
    Dependency that enforces the route group of the requested page.

    Usage:
        @router.get("/dashboard")
        async def dashboard(access: GuardDecision = Depends(require_page_access)):
            return {"role": access.role}
    """
    decision = await context.route_guard.check(request.url.path)
    if not decision.allowed:
        raise RouteRedirect(decision.redirect_to or "/")
    return decision


async def get_current_user(
    context: BrowserContext = Depends(get_browser_context),
) -> CachedUserData:
    """
    Dependency that requires a signed-in browser.

    Usage:
        @router.get("/me")
        async def me(user: CachedUserData = Depends(get_current_user)):
            return user
    """
    user = await context.current_user.resolve()
    if user is None:
        raise AuthError("Not signed in")
    return user

