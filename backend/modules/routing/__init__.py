"""
Role routing module.

Public API:
- destination_for / destination_for_profile: landing page for a role
- is_elevated / has_elevated_access: dashboard access checks
- classify_path: route group of a path
- RouteGuard: per-browser page access decisions
"""

from .models import GuardDecision, RouteGroup
from .policy import (
    CUSTOMER_HOME_PATH,
    DASHBOARD_PATH,
    PUBLIC_ENTRY_PATH,
    SIGNUP_PATH,
    classify_path,
    destination_for,
    destination_for_profile,
    has_elevated_access,
    is_elevated,
)

__all__ = [
    "GuardDecision",
    "RouteGroup",
    "CUSTOMER_HOME_PATH",
    "DASHBOARD_PATH",
    "PUBLIC_ENTRY_PATH",
    "SIGNUP_PATH",
    "classify_path",
    "destination_for",
    "destination_for_profile",
    "has_elevated_access",
    "is_elevated",
]
