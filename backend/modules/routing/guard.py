"""
Route guard.

Decides, for one browser and one path, whether the page may be shown or
where to send the browser instead. Wrong role and missing access collapse
into the same corrective action: a redirect to the profile's landing page.
"""

import logging

from modules.auth.exceptions import SessionError
from modules.auth.interfaces import ISessionStore
from modules.profiles.cache import UserDataCache
from modules.profiles.exceptions import ProfileLookupError
from modules.profiles.interfaces import IProfileReconciler
from modules.profiles.models import ProfileStatus, Role

from .models import GuardDecision, RouteGroup
from .policy import (
    PUBLIC_ENTRY_PATH,
    classify_path,
    destination_for_profile,
    has_elevated_access,
    is_auth_entry,
    normalize_path,
)

logger = logging.getLogger(__name__)


class RouteGuard:
    """Checks page access against the live session and profile."""

    def __init__(
        self,
        session_store: ISessionStore,
        reconciler: IProfileReconciler,
        user_cache: UserDataCache,
    ):
        self._session_store = session_store
        self._reconciler = reconciler
        self._user_cache = user_cache

    async def check(self, path: str) -> GuardDecision:
        path = normalize_path(path)
        group = classify_path(path)

        try:
            session = self._session_store.get_session()
        except SessionError as e:
            logger.warning("Session check failed on %s: %s", path, e.details.get("reason"))
            session = None

        if session is None:
            self._user_cache.clear()
            if group is RouteGroup.PUBLIC:
                return GuardDecision(path=path, group=group, allowed=True)
            return GuardDecision(
                path=path, group=group, allowed=False, redirect_to=PUBLIC_ENTRY_PATH
            )

        try:
            profile = await self._reconciler.ensure_profile(session)
            role, status = profile.role, profile.status
            self._user_cache.save_if_remember(profile)
        except ProfileLookupError as e:
            # Least privilege when the profile cannot be read
            logger.warning("Profile lookup failed on %s: %s", path, e.details.get("reason"))
            role, status = Role.CUSTOMER, ProfileStatus.ACTIVE

        home = destination_for_profile(role, status)
        decision = dict(path=path, group=group, user_id=session.user_id, role=role, status=status)

        if group is RouteGroup.PUBLIC:
            if is_auth_entry(path):
                return GuardDecision(**decision, allowed=False, redirect_to=home)
            return GuardDecision(**decision, allowed=True)

        if group is RouteGroup.ELEVATED and not has_elevated_access(role, status):
            return GuardDecision(**decision, allowed=False, redirect_to=home)

        return GuardDecision(**decision, allowed=True)
