"""AuthSub and ClientLogin helpers for the Google Contacts feed.

Web applications send the user to :func:`authentication_url`; Google
redirects back to the target URL with a ``token`` query parameter. That token
is good for one request unless it was requested with ``session=True``, in
which case :meth:`GoogleAuthClient.session_token` exchanges it for a session
token that never expires. :meth:`GoogleAuthClient.client_login` is the
email/password alternative.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

import httpx

from ..config.config import Settings
from ..utils.http import HTTP
from ..utils.query_string import query_string

logger = logging.getLogger(__name__)

DOMAIN = "www.google.com"
AUTHSUB_PATH = "/accounts/AuthSub"
AUTHSUB_REQUEST_PATH = AUTHSUB_PATH + "Request"
AUTHSUB_SESSION_TOKEN_PATH = AUTHSUB_PATH + "SessionToken"
CLIENT_LOGIN_PATH = "/accounts/ClientLogin"
FEEDS_PATH = "/m8/feeds/contacts/"

AUTHENTICATION_URL_DEFAULTS: Mapping[str, Any] = MappingProxyType(
    {
        "scope": f"http://{DOMAIN}{FEEDS_PATH}",
        "secure": False,
        "session": False,
    }
)

CLIENT_LOGIN_DEFAULTS: Mapping[str, str] = MappingProxyType(
    {"accountType": "GOOGLE", "service": "cp"}
)


def auth_header(token: str) -> Mapping[str, str]:
    return {"Authorization": f'AuthSub token="{token}"'}


def authentication_url(
    target: Optional[str], options: Optional[Mapping[str, Any]] = None
) -> str:
    """URL of the Google page where the user grants access.

    Options are:

    * ``scope`` -- AuthSub scope the token is valid for
      (default: ``http://www.google.com/m8/feeds/contacts/``)
    * ``secure`` -- whether the token will be a secure token (default: False)
    * ``session`` -- whether the token may be exchanged for a session token
      (default: False)

    A ``None`` target or option value is left out of the query.
    """

    params = {**AUTHENTICATION_URL_DEFAULTS, **(options or {})}
    params["next"] = target
    return f"https://{DOMAIN}{AUTHSUB_REQUEST_PATH}?{query_string(params)}"


def extract_value(body: str, key: str) -> Optional[str]:
    """Return the value of the first ``key=value`` line of *body* for *key*."""

    for line in body.split("\n"):
        name, sep, value = line.partition("=")
        if sep and name == key:
            return value.strip()
    return None


class GoogleAuthClient:
    """Token exchange and credential login against ``www.google.com``."""

    def __init__(
        self,
        *,
        settings: Optional[Settings] = None,
        verify: Optional[bool] = None,
        request_timeout: Optional[int] = None,
        source: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or Settings()
        self.verify = (
            self._settings.google_verify_ssl if verify is None else bool(verify)
        )
        self.request_timeout = request_timeout or self._settings.google_request_timeout
        self.source = source or self._settings.google_client_login_source
        self._http = HTTP(
            base_url=f"https://{DOMAIN}",
            timeout=float(self.request_timeout),
            verify=self.verify,
            transport=transport,
        )

    def session_token(self, token: str) -> Optional[str]:
        """Exchange a one-time AuthSub *token* for a session token.

        Returns ``None`` when the response carries no ``Token`` line.
        """

        response = self._http.get(AUTHSUB_SESSION_TOKEN_PATH, headers=auth_header(token))
        session = extract_value(response.text, "Token")
        if session is None:
            logger.warning(
                "AuthSub session token missing from response",
                extra={"status_code": response.status_code},
            )
        return session

    def client_login(self, email: str, password: str) -> Optional[str]:
        """Authenticate with *email* and *password*; return the ``Auth`` value.

        Returns ``None`` when the response carries no ``Auth`` line, which is
        how Google reports bad credentials.
        """

        params = {
            **CLIENT_LOGIN_DEFAULTS,
            "source": self.source,
            "Email": email,
            "Passwd": password,
        }
        response = self._http.post(
            CLIENT_LOGIN_PATH,
            content=query_string(params),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        auth = extract_value(response.text, "Auth")
        if auth is None:
            logger.warning(
                "ClientLogin response did not include an Auth value",
                extra={"status_code": response.status_code},
            )
        return auth

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GoogleAuthClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


__all__ = [
    "AUTHENTICATION_URL_DEFAULTS",
    "CLIENT_LOGIN_DEFAULTS",
    "DOMAIN",
    "FEEDS_PATH",
    "GoogleAuthClient",
    "auth_header",
    "authentication_url",
    "extract_value",
]
