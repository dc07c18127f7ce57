"""Exception hierarchy shared by the auth flow and the contacts feed client."""

from __future__ import annotations

from typing import Optional

import httpx


class ContactsError(RuntimeError):
    """Base class for every failure raised by :mod:`gcontacts`."""


class TransportError(ContactsError):
    """Network or TLS level failure while talking to Google."""


class FetchingError(ContactsError):
    """The contacts feed answered with a non-success HTTP status."""

    def __init__(self, response: httpx.Response, message: Optional[str] = None) -> None:
        self.response = response
        self.status_code = response.status_code
        super().__init__(
            message
            or f"Contacts feed request failed with HTTP {response.status_code}"
        )


class DecompressionError(ContactsError):
    """A gzip encoded response body could not be decompressed."""


class FeedParseError(ContactsError):
    """The contacts feed body is not well-formed XML."""


__all__ = [
    "ContactsError",
    "DecompressionError",
    "FeedParseError",
    "FetchingError",
    "TransportError",
]
