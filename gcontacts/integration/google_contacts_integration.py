"""Read-only integration for the Google Contacts data feed."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional
from urllib.parse import quote_plus

import httpx

from ..config.config import Settings
from ..errors import FetchingError
from ..utils.compression import response_body
from ..utils.http import HTTP
from ..utils.query_string import query_string
from .feed_parser import Contact, ContactFeed, parse_contacts
from .google_auth import DOMAIN, FEEDS_PATH, auth_header
from .parameters import translate_parameters

logger = logging.getLogger(__name__)


class GoogleContactsIntegration:
    """Fetches and parses a user's contact list with an AuthSub token.

    By default an AuthSub token is good for a single request; exchange it for
    a session token first when the instance will fetch more than once.

        >>> gmail = GoogleContactsIntegration(token)
        >>> gmail.contacts()
        [Contact(name='Fitzgerald', emails=('fubar@gmail.com', ...)), ...]
    """

    def __init__(
        self,
        token: str,
        user_id: str = "default",
        *,
        settings: Optional[Settings] = None,
        projection: Optional[str] = None,
        request_timeout: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._settings = settings or Settings()
        self.user = str(user_id)
        self.token = str(token)
        self.headers: Dict[str, str] = {
            "Accept-Encoding": "gzip",
            **auth_header(self.token),
        }
        self.projection = projection or self._settings.google_contacts_projection
        self.page_size = self._settings.google_contacts_page_size
        self.request_timeout = request_timeout or self._settings.google_request_timeout
        self._feed: Optional[ContactFeed] = None
        self._http = HTTP(
            base_url=f"https://{DOMAIN}",
            timeout=float(self.request_timeout),
            verify=self._settings.google_verify_ssl,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def contacts(self, options: Optional[Mapping[str, Any]] = None) -> List[Contact]:
        """Fetch, parse and return the contact list.

        Options are:

        * ``limit`` -- maximum number of entries (default: 200)
        * ``offset`` -- 0-based value, can be used for pagination
        * ``order`` -- currently the only value supported by Google is
          ``"lastmodified"``
        * ``descending`` -- boolean
        * ``updated_after`` -- string or datetime, only fetch contacts updated
          after this moment
        """

        return self.fetch_feed(options).contacts

    def fetch_feed(self, options: Optional[Mapping[str, Any]] = None) -> ContactFeed:
        """Like :meth:`contacts` but return the whole :class:`ContactFeed`."""

        params = {"limit": self.page_size, **(options or {})}
        path = self.feed_path(params)
        with self._http.stream("GET", path, headers=self.headers) as response:
            if not response.is_success:
                try:
                    response.read()
                except httpx.DecodingError:
                    logger.warning(
                        "Could not decode error response body",
                        extra={"status_code": response.status_code},
                    )
                logger.error(
                    "Contacts feed request failed",
                    extra={"status_code": response.status_code, "user": self.user},
                )
                raise FetchingError(response)
            body = response_body(response)

        self._feed = parse_contacts(body)
        return self._feed

    def iter_contacts(
        self,
        options: Optional[Mapping[str, Any]] = None,
        *,
        page_size: Optional[int] = None,
    ) -> Iterator[Contact]:
        """Yield contacts from every page of the feed, one request per page."""

        params = dict(options or {})
        limit = int(page_size or params.get("limit") or self.page_size)
        params["limit"] = limit
        offset = int(params.get("offset") or 0)

        while True:
            params["offset"] = offset
            feed = self.fetch_feed(params)
            yield from feed.contacts

            offset += feed.entry_count
            if feed.entry_count < limit:
                break
            if feed.total_results is not None and offset >= feed.total_results:
                break

    def feed_path(self, params: Mapping[str, Any]) -> str:
        """Path and query of the feed request for *params*."""

        path = f"{FEEDS_PATH}{quote_plus(self.user, safe='')}/{self.projection}"
        query = query_string(translate_parameters(params))
        return f"{path}?{query}" if query else path

    @property
    def updated_at(self) -> Optional[datetime]:
        """Timestamp of the last update of the most recently fetched feed."""

        return self._feed.updated_at if self._feed is not None else None

    @property
    def updated_at_string(self) -> Optional[str]:
        """Timestamp of the last update as it appeared in the feed document."""

        return self._feed.updated_string if self._feed is not None else None

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "GoogleContactsIntegration":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
