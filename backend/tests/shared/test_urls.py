"""Tests for shared/urls.py."""

import pytest

from shared.config import Settings
from shared.exceptions import ConfigurationError
from shared.urls import build_redirect, get_app_url


def settings_with(app_url: str) -> Settings:
    return Settings(_env_file=None, app_url=app_url)


class TestGetAppUrl:
    def test_strips_trailing_slashes(self):
        assert get_app_url(settings_with("https://shop.example.com//")) == "https://shop.example.com"

    def test_missing_app_url_raises(self):
        with pytest.raises(ConfigurationError) as exc_info:
            get_app_url(settings_with("  "))
        assert exc_info.value.code == "APP_URL_MISSING"

    def test_uses_global_settings(self):
        """Without explicit settings the environment is used."""
        assert get_app_url() == "https://shop.example.com"


class TestBuildRedirect:
    @pytest.mark.parametrize(
        "base,path",
        [
            ("https://shop.example.com", "/auth/callback"),
            ("https://shop.example.com/", "/auth/callback"),
            ("https://shop.example.com/", "auth/callback"),
            ("https://shop.example.com", "//auth/callback"),
        ],
    )
    def test_exactly_one_slash(self, base, path):
        """Base and path should always be joined with a single slash."""
        url = build_redirect(path, settings_with(base))
        assert url == "https://shop.example.com/auth/callback"

    def test_missing_app_url_raises(self):
        with pytest.raises(ConfigurationError):
            build_redirect("/auth/callback", settings_with(""))
