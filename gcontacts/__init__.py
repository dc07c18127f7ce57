"""Client for the Google Contacts data feed with AuthSub and ClientLogin support."""

from .errors import (
    ContactsError,
    DecompressionError,
    FeedParseError,
    FetchingError,
    TransportError,
)
from .integration import (
    Contact,
    ContactFeed,
    GoogleAuthClient,
    GoogleContactsIntegration,
    authentication_url,
)

__all__ = [
    "Contact",
    "ContactFeed",
    "ContactsError",
    "DecompressionError",
    "FeedParseError",
    "FetchingError",
    "GoogleAuthClient",
    "GoogleContactsIntegration",
    "TransportError",
    "authentication_url",
]
