"""Tests for the auth endpoints."""

from shared.config import get_settings


def valid_signup(**overrides) -> dict:
    data = {
        "email": "jane@example.com",
        "firstname": "Jane",
        "lastname": "Doe",
        "phone": "(555) 123-4567",
        "accept_terms": True,
    }
    data.update(overrides)
    return data


class TestMagicLinks:
    def test_signup(self, client, session_store):
        response = client.post("/auth/signup", json=valid_signup())

        assert response.status_code == 202
        assert response.json()["email"] == "jane@example.com"
        link = session_store.email_links[0]
        assert link["redirect_to"] == "https://shop.example.com/auth/callback"

    def test_signup_validation_errors(self, client, session_store):
        response = client.post("/auth/signup", json=valid_signup(firstname="", accept_terms=False))

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "SIGNUP_INVALID"
        assert set(body["fields"]) == {"firstname", "accept_terms"}
        assert session_store.email_links == []

    def test_login(self, client, storage):
        response = client.post("/auth/login", json={"email": "jane@example.com", "remember": True})

        assert response.status_code == 202
        assert storage.get_item("remember_me") == "true"

    def test_login_remember_default(self, client, storage, monkeypatch):
        monkeypatch.setenv("REMEMBER_ME_DEFAULT", "true")
        get_settings.cache_clear()

        client.post("/auth/login", json={"email": "jane@example.com"})

        assert storage.get_item("remember_me") == "true"

    def test_provider_failure_is_bad_gateway(self, client, session_store):
        session_store.fail_sign_in = True

        response = client.post("/auth/login", json={"email": "jane@example.com"})

        assert response.status_code == 502
        body = response.json()
        assert body["error"] == "SIGN_IN_FAILED"
        assert "reason" not in body["details"]

    def test_missing_app_url_is_server_error(self, client, monkeypatch):
        monkeypatch.setenv("APP_URL", "")
        get_settings.cache_clear()

        response = client.post("/auth/login", json={"email": "jane@example.com"})

        assert response.status_code == 500
        assert response.json()["error"] == "APP_URL_MISSING"


class TestOAuth:
    def test_sign_in_redirects_to_provider(self, client, session_store):
        response = client.get("/auth/oauth/google")

        assert response.status_code == 303
        assert response.headers["location"].startswith("https://auth.example.com/authorize")
        assert session_store.oauth_requests[0]["provider"] == "google"

    def test_unknown_provider(self, client):
        response = client.get("/auth/oauth/myspace")
        assert response.status_code == 422

    def test_signup_keeps_form_for_callback(self, client, pending_cache):
        response = client.post("/auth/oauth/github", json=valid_signup(email=""))

        assert response.status_code == 200
        assert response.json()["provider"] == "github"
        assert pending_cache.read().firstname == "Jane"


class TestCallback:
    def test_success_redirects_to_landing_page(self, client, session_store, repository, session_factory):
        session_store.exchange_result = session_factory(full_name="Jane Doe")

        response = client.get("/auth/callback?code=pkce-code")

        assert response.status_code == 303
        assert response.headers["location"] == "/index"
        assert repository.rows["user-123"].firstname == "Jane"
        assert session_store.listeners == []

    def test_admin_redirects_to_dashboard(
        self, client, session_store, repository, session_factory, profile_factory
    ):
        from modules.profiles.models import Role

        session_store.session = session_factory()
        repository.rows["user-123"] = profile_factory(role=Role.ADMIN)

        response = client.get("/auth/callback")

        assert response.headers["location"] == "/dashboard"

    def test_access_denied_redirects_home(self, client):
        response = client.get("/auth/callback?error=access_denied&error_description=User+denied")

        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_no_session_redirects_home(self, client):
        response = client.get("/auth/callback")

        assert response.status_code == 303
        assert response.headers["location"] == "/"

    def test_provider_error_renders_failure_page(self, client):
        response = client.get("/auth/callback?error=server_error&error_description=<script>")

        assert response.status_code == 401
        assert "Authentication failed. Please try again." in response.text
        assert 'content="3;url=/signup"' in response.text
        assert '<a href="/">' in response.text
        assert "<script>" not in response.text

    def test_reconciliation_failure_renders_failure_page(
        self, client, session_store, repository, session_factory
    ):
        session_store.session = session_factory()
        repository.fail_lookup = True

        response = client.get("/auth/callback")

        assert response.status_code == 401
        assert "Authentication Failed" in response.text


class TestLogout:
    def test_logout(self, client, session_store, storage):
        storage.set_item("remember_me", "true")

        response = client.post("/auth/logout")

        assert response.status_code == 303
        assert response.headers["location"] == "/"
        assert session_store.signed_out is True
        assert storage.storage == {}
