"""
Account entry points: signup, sign-in and sign-out.

Starting a sign-in never creates a profile; profiles are provisioned by
the callback once the provider has issued a session.
"""

import logging
import re
from typing import Optional

from modules.profiles.cache import PendingSignupCache, UserDataCache
from shared.urls import build_redirect

from .exceptions import SignInError, SignupValidationError
from .interfaces import ISessionStore
from .models import OAuthProvider, SignupForm

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/auth/callback"
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PHONE_DIGITS = 10


def validate_email(email: str) -> Optional[str]:
    """Return an error message for an invalid email, or None."""
    if not email or not email.strip():
        return "Please enter your email address."
    if not EMAIL_PATTERN.match(email.strip()):
        return "Please enter a valid email address."
    return None


def validate_signup_form(form: SignupForm, require_email: bool = True) -> dict[str, str]:
    """
    Collect field-level errors for a signup form.

    Returns:
        Mapping of field name to message; empty when the form is valid
    """
    errors: dict[str, str] = {}

    if require_email:
        email_error = validate_email(form.email)
        if email_error:
            errors["email"] = email_error

    if not form.firstname.strip():
        errors["firstname"] = "First name is required."
    if not form.lastname.strip():
        errors["lastname"] = "Last name is required."

    if form.phone and len(re.sub(r"\D", "", form.phone)) < MIN_PHONE_DIGITS:
        errors["phone"] = "Please enter a valid phone number."

    if not form.accept_terms:
        errors["accept_terms"] = "Please accept the Terms & Conditions to continue."

    return errors


def format_phone_number(value: str) -> str:
    """Format a US-style phone number as ``(555) 123-4567`` while typing."""
    digits = re.sub(r"\D", "", value)
    if len(digits) < 4:
        return digits
    if len(digits) < 7:
        return f"({digits[:3]}) {digits[3:]}"
    return f"({digits[:3]}) {digits[3:6]}-{digits[6:10]}"


def _with_formatted_phone(form: SignupForm) -> SignupForm:
    if not form.phone:
        return form
    return form.model_copy(update={"phone": format_phone_number(form.phone)})


class AccountService:
    """Starts and ends auth sessions for one browser."""

    def __init__(
        self,
        session_store: ISessionStore,
        pending_cache: PendingSignupCache,
        user_cache: UserDataCache,
    ):
        self._session_store = session_store
        self._pending_cache = pending_cache
        self._user_cache = user_cache

    async def request_signup_link(self, form: SignupForm) -> None:
        """
        Validate a signup form and email a magic link.

        The profile fields travel as auth user metadata, where the
        reconciler picks them up once the link is followed.

        Raises:
            SignupValidationError: If any field is invalid
            SignInError: If the provider refused to send the link
        """
        # A signup abandoned at the provider must not seed this one
        self._pending_cache.clear()

        errors = validate_signup_form(form)
        if errors:
            raise SignupValidationError(errors)
        form = _with_formatted_phone(form)

        self._session_store.sign_in_with_email_link(
            form.email.strip(),
            redirect_to=build_redirect(CALLBACK_PATH),
            data=form.to_user_metadata(),
        )

    async def request_login_link(self, email: str, remember: bool = False) -> None:
        """
        Email a sign-in magic link and record the "remember me" choice.

        Raises:
            SignupValidationError: If the email is invalid
            SignInError: If the provider refused to send the link
        """
        self._pending_cache.clear()

        email_error = validate_email(email)
        if email_error:
            raise SignupValidationError({"email": email_error})

        self._user_cache.set_remember(remember)
        self._session_store.sign_in_with_email_link(
            email.strip(),
            redirect_to=build_redirect(CALLBACK_PATH),
        )

    async def start_oauth(
        self,
        provider: OAuthProvider,
        form: Optional[SignupForm] = None,
    ) -> str:
        """
        Start an OAuth sign-in or signup.

        Pending data from any earlier attempt is dropped first. For a
        signup the form is validated and saved as pending data before the
        redirect; it is dropped again if the redirect cannot be started.

        Returns:
            Provider authorize URL

        Raises:
            SignupValidationError: If the signup form is invalid
            SignInError: If the provider URL could not be produced
        """
        self._pending_cache.clear()
        if form is not None:
            errors = validate_signup_form(form, require_email=False)
            if errors:
                raise SignupValidationError(errors)
            self._pending_cache.save(_with_formatted_phone(form).to_pending())

        try:
            return self._session_store.sign_in_with_oauth(
                provider.value,
                redirect_to=build_redirect(CALLBACK_PATH),
                extra_params=provider.query_params,
            )
        except SignInError:
            self._pending_cache.clear()
            raise

    async def sign_out(self) -> None:
        """
        Sign out and forget everything cached for this browser.

        Raises:
            SignOutError: If the provider rejected the sign-out
        """
        self._session_store.sign_out()
        self._user_cache.clear_all()
