"""Tests for shared/models.py."""

from datetime import datetime, timezone

import pytest

from shared.models import Session


class TestSession:
    def test_defaults(self):
        session = Session(user_id="user-123")
        assert session.user_email == ""
        assert session.provider_metadata == {}
        assert session.expiry is None

    def test_is_immutable(self):
        session = Session(user_id="user-123")
        with pytest.raises(Exception):  # Pydantic ValidationError
            session.user_id = "other"

    def test_expiry(self):
        session = Session(user_id="user-123", expires_at=1704067200)
        assert session.expiry == datetime(2024, 1, 1, tzinfo=timezone.utc)
