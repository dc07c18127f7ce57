"""
config/config.py

Purpose
-------
Centralized settings for the Google Contacts client.
- Normalizes environment variable names across legacy and canonical variants.
- Provides typed, immutable defaults for the auth flow and the feed fetcher.

Notes for Maintainers
---------------------
- Certificate verification is on unless GOOGLE_VERIFY_SSL is explicitly false.
- Set SETTINGS_SKIP_DOTENV=1 to keep a local .env file out of the picture (tests).

Examples
--------
# Bash:
export GOOGLE_AUTH_TOKEN='1/abcdef'
export GOOGLE_CONTACTS_PROJECTION=full
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

try:  # pragma: no cover - optional dependency import
    from dotenv import load_dotenv
except ImportError:  # pragma: no cover - fallback if python-dotenv is unavailable
    load_dotenv = None


if load_dotenv is not None and not os.getenv("SETTINGS_SKIP_DOTENV"):
    load_dotenv()


# -----------------------------
# Helper functions
# -----------------------------
def _coalesce_env(*names: str, default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty environment variable from *names*."""
    for name in names:
        val = os.getenv(name)
        if val is not None and str(val).strip() != "":
            return val
    return default


def _parse_bool(value: Optional[str], *, default: bool) -> bool:
    if value is None:
        return default
    v = str(value).strip().lower()
    if v in {"1", "true", "yes", "y", "on"}:
        return True
    if v in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_int(
    value: Optional[str], *, default: int, minimum: Optional[int] = None
) -> int:
    if value is None or str(value).strip() == "":
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    if minimum is not None and parsed < minimum:
        return default
    return parsed


# -----------------------------
# Main Settings
# -----------------------------
class Settings(BaseSettings):
    # --- Auth flow ---
    google_client_login_source: str = Field(
        default_factory=lambda: _coalesce_env(
            "GOOGLE_CLIENT_LOGIN_SOURCE", "CONTACTS_SOURCE"
        )
        or "Contacts-Python"
    )
    google_verify_ssl: bool = Field(
        default_factory=lambda: _parse_bool(
            _coalesce_env("GOOGLE_VERIFY_SSL"), default=True
        )
    )
    google_request_timeout: int = Field(
        default_factory=lambda: _parse_int(
            _coalesce_env("GOOGLE_REQUEST_TIMEOUT"), default=10, minimum=1
        )
    )

    # --- Contacts feed ---
    google_contacts_projection: str = Field(
        default_factory=lambda: _coalesce_env("GOOGLE_CONTACTS_PROJECTION") or "thin"
    )
    google_contacts_page_size: int = Field(
        default_factory=lambda: _parse_int(
            _coalesce_env("GOOGLE_CONTACTS_PAGE_SIZE"), default=200, minimum=1
        )
    )

    # --- CLI convenience ---
    google_auth_token: Optional[str] = Field(
        default_factory=lambda: _coalesce_env("GOOGLE_AUTH_TOKEN")
    )
    google_user_id: str = Field(
        default_factory=lambda: _coalesce_env("GOOGLE_USER_ID") or "default"
    )

    # --- Observability ---
    log_level: str = Field(
        default_factory=lambda: (_coalesce_env("LOG_LEVEL") or "INFO").strip().upper()
    )

    model_config = SettingsConfigDict(case_sensitive=False, frozen=True)

    # Environment values are read by the field factories above only.
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)

    @field_validator("google_request_timeout", "google_contacts_page_size")
    @classmethod
    def _ensure_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        return str(value).strip().upper() or "INFO"


# Singleton settings instance
settings = Settings()
