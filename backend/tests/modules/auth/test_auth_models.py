"""Tests for auth module models and exceptions."""

from modules.auth.exceptions import OAuthProviderError, SignupValidationError
from modules.auth.models import OAuthProvider, SignupForm
from shared.exceptions import ValidationError


class TestOAuthProvider:
    def test_google_requests_consent(self):
        assert OAuthProvider.GOOGLE.query_params == {"access_type": "offline", "prompt": "consent"}

    def test_github_has_no_extra_params(self):
        assert OAuthProvider.GITHUB.query_params == {}


class TestSignupForm:
    def test_to_pending_drops_blank_fields(self):
        form = SignupForm(firstname="Jane", lastname="Doe", phone="", address="  ")
        pending = form.to_pending()
        assert pending.phone is None
        assert pending.address is None

    def test_user_metadata_is_customer(self):
        metadata = SignupForm(firstname=" Jane ", lastname="Doe").to_user_metadata()
        assert metadata["firstname"] == "Jane"
        assert metadata["role"] == "customer"
        assert metadata["phone"] is None


class TestExceptions:
    def test_access_denied_is_cancellation(self):
        assert OAuthProviderError("access_denied").is_cancellation is True
        assert OAuthProviderError("server_error", "boom").is_cancellation is False

    def test_signup_validation_error(self):
        error = SignupValidationError({"email": "Please enter your email address."})
        assert isinstance(error, ValidationError)
        assert error.message == "Please enter your email address."
        assert error.to_dict()["details"] == {"fields": error.fields}
