"""
Role routing policy.

Maps roles to landing pages and paths to route groups. Anything that is
not recognizably elevated is treated as a customer.
"""

from typing import Any, Optional

from modules.profiles.models import ProfileStatus, Role, coerce_role

from .models import RouteGroup

ELEVATED_ROLES = frozenset({Role.ADMIN, Role.MANAGER, Role.STAFF})

PUBLIC_ENTRY_PATH = "/"
SIGNUP_PATH = "/signup"
CALLBACK_PATH = "/auth/callback"
CUSTOMER_HOME_PATH = "/index"
DASHBOARD_PATH = "/dashboard"

# Sign-in/sign-up pages: a signed-in browser is sent on to its landing page
AUTH_ENTRY_PATHS = frozenset({PUBLIC_ENTRY_PATH, "/login", SIGNUP_PATH, "/register"})
PUBLIC_PATHS = AUTH_ENTRY_PATHS | {CALLBACK_PATH}
# Legal pages, matched on whole path segments
PUBLIC_PREFIXES = ("/privacy", "/terms")


def _to_role(role: Any) -> Optional[Role]:
    if role is None:
        return None
    return coerce_role(role)


def is_elevated(role: Any) -> bool:
    """True for staff, manager and admin; False for anything else."""
    return _to_role(role) in ELEVATED_ROLES


def destination_for(role: Any) -> str:
    """Landing page for a role."""
    return DASHBOARD_PATH if is_elevated(role) else CUSTOMER_HOME_PATH


def has_elevated_access(role: Any, status: Any = ProfileStatus.ACTIVE) -> bool:
    """Elevated role on an active account."""
    return is_elevated(role) and _is_active(status)


def destination_for_profile(role: Any, status: Any = ProfileStatus.ACTIVE) -> str:
    """Landing page for a profile; inactive accounts never reach the dashboard."""
    return DASHBOARD_PATH if has_elevated_access(role, status) else CUSTOMER_HOME_PATH


def _is_active(status: Any) -> bool:
    if isinstance(status, ProfileStatus):
        return status is ProfileStatus.ACTIVE
    return str(status).strip().lower() == ProfileStatus.ACTIVE.value


def normalize_path(path: str) -> str:
    """Strip query/fragment and trailing slashes; always start with a slash."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    path = "/" + path.strip("/")
    return path


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def classify_path(path: str) -> RouteGroup:
    """Route group a path belongs to."""
    path = normalize_path(path)

    if path in PUBLIC_PATHS or any(_under(path, prefix) for prefix in PUBLIC_PREFIXES):
        return RouteGroup.PUBLIC
    if _under(path, DASHBOARD_PATH):
        return RouteGroup.ELEVATED
    return RouteGroup.CUSTOMER


def is_auth_entry(path: str) -> bool:
    return normalize_path(path) in AUTH_ENTRY_PATHS
