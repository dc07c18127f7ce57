"""Tests for configuration settings loading."""

import pytest
from pydantic import ValidationError

from gcontacts.config.config import Settings, _parse_bool, _parse_int


def test_defaults(settings):
    assert settings.google_client_login_source == "Contacts-Python"
    assert settings.google_verify_ssl is True
    assert settings.google_request_timeout == 10
    assert settings.google_contacts_projection == "thin"
    assert settings.google_contacts_page_size == 200
    assert settings.google_auth_token is None
    assert settings.google_user_id == "default"
    assert settings.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("CONTACTS_SOURCE", "MyApp-1.0")
    monkeypatch.setenv("GOOGLE_VERIFY_SSL", "false")
    monkeypatch.setenv("GOOGLE_CONTACTS_PROJECTION", "full")
    monkeypatch.setenv("GOOGLE_CONTACTS_PAGE_SIZE", "50")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.google_client_login_source == "MyApp-1.0"
    assert settings.google_verify_ssl is False
    assert settings.google_contacts_projection == "full"
    assert settings.google_contacts_page_size == 50
    assert settings.log_level == "DEBUG"


def test_settings_are_immutable(settings):
    with pytest.raises(ValidationError):
        settings.google_verify_ssl = False


def test_non_positive_page_size_is_rejected():
    with pytest.raises(ValidationError):
        Settings(google_contacts_page_size=0)


def test_parse_helpers_fall_back_to_defaults():
    assert _parse_bool(None, default=True) is True
    assert _parse_bool("off", default=True) is False
    assert _parse_bool("maybe", default=False) is False
    assert _parse_int("abc", default=7) == 7
    assert _parse_int(" 12 ", default=7) == 12



def test_malformed_env_values_fall_back_to_defaults(monkeypatch):
    monkeypatch.setenv("GOOGLE_REQUEST_TIMEOUT", "abc")
    monkeypatch.setenv("GOOGLE_VERIFY_SSL", "maybe")
    monkeypatch.setenv("GOOGLE_CONTACTS_PAGE_SIZE", "0")

    settings = Settings()

    assert settings.google_request_timeout == 10
    assert settings.google_verify_ssl is True
    assert settings.google_contacts_page_size == 200


def test_explicit_arguments_win_over_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_CONTACTS_PROJECTION", "full")

    settings = Settings(google_contacts_projection="property-email")

    assert settings.google_contacts_projection == "property-email"
