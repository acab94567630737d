"""Tests for the profile repository with a mocked Supabase client."""

import httpx
import pytest
from unittest.mock import MagicMock
from postgrest.exceptions import APIError

from modules.profiles.exceptions import ProfileLookupError, ProfilePersistenceError
from modules.profiles.models import Profile, ProfileStatus, Role
from modules.profiles.repository import ProfileRepository


def create_mock_row(user_id: str = "user-123", **overrides) -> dict:
    """Helper to create a users-table row."""
    row = {
        "id": user_id,
        "email": "jane@example.com",
        "firstname": "Jane",
        "lastname": "Doe",
        "phone": None,
        "address": None,
        "city": None,
        "zipcode": None,
        "role": "customer",
        "status": "active",
        "created_at": "2024-01-01T00:00:00+00:00",
        "updated_at": "2024-01-01T00:00:00+00:00",
    }
    row.update(overrides)
    return row


def api_error(message: str = "permission denied", code: str = "42501") -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


class TestFindById:
    def test_returns_profile(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [create_mock_row(role="admin")]

        profile = ProfileRepository(mock_db).find_by_id("user-123")

        mock_db.table.assert_called_with("users")
        mock_db.table.return_value.select.return_value.eq.assert_called_with("id", "user-123")
        assert profile.id == "user-123"
        assert profile.role is Role.ADMIN

    def test_missing_row(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = []

        assert ProfileRepository(mock_db).find_by_id("user-123") is None

    def test_null_names_and_unknown_status(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [
            create_mock_row(firstname=None, lastname=None, status="archived", role=None)
        ]

        profile = ProfileRepository(mock_db).find_by_id("user-123")

        assert profile.firstname == ""
        assert profile.lastname == ""
        assert profile.role is Role.CUSTOMER
        assert profile.status is ProfileStatus.INACTIVE

    def test_api_error_raises_lookup_error(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = api_error()

        with pytest.raises(ProfileLookupError) as exc_info:
            ProfileRepository(mock_db).find_by_id("user-123")
        assert exc_info.value.details["reason"] == "42501: permission denied"

    def test_transport_error_raises_lookup_error(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(ProfileLookupError):
            ProfileRepository(mock_db).find_by_id("user-123")


class TestUpsert:
    def test_upsert_ignores_duplicates_on_id(self):
        mock_db = MagicMock()
        upsert = mock_db.table.return_value.upsert
        upsert.return_value.execute.return_value.data = [create_mock_row()]
        profile = Profile(id="user-123", email="jane@example.com", firstname="Jane", lastname="Doe")

        stored = ProfileRepository(mock_db).upsert(profile)

        args, kwargs = upsert.call_args
        assert args[0]["id"] == "user-123"
        assert kwargs == {"on_conflict": "id", "ignore_duplicates": True}
        assert stored.firstname == "Jane"

    def test_lost_race_returns_existing_row(self):
        """An ignored duplicate should return the row the winner wrote."""
        mock_db = MagicMock()
        mock_db.table.return_value.upsert.return_value.execute.return_value.data = []
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value.data = [create_mock_row(firstname="Winner")]
        profile = Profile(id="user-123", firstname="Loser")

        stored = ProfileRepository(mock_db).upsert(profile)

        assert stored.firstname == "Winner"

    def test_upsert_error_raises_persistence_error(self):
        mock_db = MagicMock()
        mock_db.table.return_value.upsert.return_value.execute.side_effect = api_error()

        with pytest.raises(ProfilePersistenceError) as exc_info:
            ProfileRepository(mock_db).upsert(Profile(id="user-123"))
        assert exc_info.value.code == "PROFILE_PERSIST_FAILED"

    def test_reread_failure_raises_persistence_error(self):
        mock_db = MagicMock()
        mock_db.table.return_value.upsert.return_value.execute.return_value.data = []
        query = mock_db.table.return_value.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(ProfilePersistenceError):
            ProfileRepository(mock_db).upsert(Profile(id="user-123"))


class TestInsert:
    def test_insert(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.return_value.data = [create_mock_row()]

        stored = ProfileRepository(mock_db).insert(Profile(id="user-123"))

        assert stored.email == "jane@example.com"

    def test_duplicate_insert_raises(self):
        mock_db = MagicMock()
        mock_db.table.return_value.insert.return_value.execute.side_effect = api_error(
            "duplicate key value violates unique constraint", "23505"
        )

        with pytest.raises(ProfilePersistenceError):
            ProfileRepository(mock_db).insert(Profile(id="user-123"))


class TestListUsers:
    def test_lists_rows_oldest_first(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.order.return_value
        query.execute.return_value.data = [
            create_mock_row(),
            create_mock_row("user-456", role="staff", status="suspended"),
        ]

        users = ProfileRepository(mock_db).list_users()

        mock_db.table.assert_called_with("users")
        columns = mock_db.table.return_value.select.call_args[0][0]
        assert "role" in columns and "created_at" in columns
        mock_db.table.return_value.select.return_value.order.assert_called_with("created_at")
        assert [u.id for u in users] == ["user-123", "user-456"]
        assert users[1].status is ProfileStatus.SUSPENDED

    def test_empty_table(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.order.return_value
        query.execute.return_value.data = []

        assert ProfileRepository(mock_db).list_users() == []

    def test_api_error_raises_lookup_error(self):
        mock_db = MagicMock()
        query = mock_db.table.return_value.select.return_value.order.return_value
        query.execute.side_effect = api_error()

        with pytest.raises(ProfileLookupError):
            ProfileRepository(mock_db).list_users()
