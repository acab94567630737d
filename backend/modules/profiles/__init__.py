"""
Profiles module.

Owns the storefront's ``users`` rows and their browser-local projections.

Public API:
- IProfileRepository / ProfileRepository: Supabase access to profile rows
- IProfileReconciler / ProfileReconciler: lazy profile provisioning
- CurrentUserResolver: who is signed in for this browser
- PendingSignupCache, UserDataCache: per-browser caches
"""

from .cache import PendingSignupCache, UserDataCache
from .exceptions import ProfileLookupError, ProfilePersistenceError
from .interfaces import ICurrentUserResolver, IProfileReconciler, IProfileRepository
from .models import CachedUserData, PendingSignup, Profile, ProfileStatus, Role

__all__ = [
    # Interfaces
    "IProfileRepository",
    "IProfileReconciler",
    "ICurrentUserResolver",
    # Models
    "Profile",
    "Role",
    "ProfileStatus",
    "PendingSignup",
    "CachedUserData",
    # Caches
    "PendingSignupCache",
    "UserDataCache",
    # Exceptions
    "ProfileLookupError",
    "ProfilePersistenceError",
]
