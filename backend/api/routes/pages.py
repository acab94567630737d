"""
Role-gated pages.

Every page goes through the route guard; the handlers only report which
page was granted and to whom.
"""

from fastapi import APIRouter, Depends

from modules.routing.models import GuardDecision
from ..middleware.auth import require_page_access
from ..models.pages import PageResponse

router = APIRouter()


def _page(name: str, access: GuardDecision) -> PageResponse:
    return PageResponse(
        page=name,
        group=access.group,
        user_id=access.user_id,
        role=access.role,
        status=access.status,
    )


@router.get("/", response_model=PageResponse)
async def sign_in_page(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    """Public entry point. Signed-in browsers are sent to their landing page."""
    return _page("signin", access)


@router.get("/login", response_model=PageResponse)
async def login_page(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    return _page("login", access)


@router.get("/signup", response_model=PageResponse)
@router.get("/register", response_model=PageResponse)
async def signup_page(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    return _page("signup", access)


@router.get("/privacy", response_model=PageResponse)
async def privacy_page(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    return _page("privacy", access)


@router.get("/terms", response_model=PageResponse)
async def terms_page(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    return _page("terms", access)


@router.get("/index", response_model=PageResponse)
async def customer_home(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    """Customer landing page."""
    return _page("index", access)


@router.get("/dashboard", response_model=PageResponse)
async def dashboard(access: GuardDecision = Depends(require_page_access)) -> PageResponse:
    """Staff, manager and admin dashboard."""
    return _page("dashboard", access)


@router.get("/dashboard/{section:path}", response_model=PageResponse)
async def dashboard_section(
    section: str,
    access: GuardDecision = Depends(require_page_access),
) -> PageResponse:
    return _page(f"dashboard/{section}", access)
