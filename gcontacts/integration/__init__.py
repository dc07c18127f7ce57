"""Google Contacts integrations: AuthSub/ClientLogin and the contacts feed."""

from .feed_parser import Contact, ContactFeed, parse_contacts
from .google_auth import GoogleAuthClient, authentication_url
from .google_contacts_integration import GoogleContactsIntegration
from .parameters import translate_parameters

__all__ = [
    "Contact",
    "ContactFeed",
    "GoogleAuthClient",
    "GoogleContactsIntegration",
    "authentication_url",
    "parse_contacts",
    "translate_parameters",
]
