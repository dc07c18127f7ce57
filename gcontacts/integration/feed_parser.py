"""Parsing of the Atom contacts feed into :class:`Contact` records."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime
from functools import cached_property
from typing import Iterator, List, Optional, Tuple, Union

from ..errors import FeedParseError
from ..utils.datetime_formatting import parse_feed_timestamp

logger = logging.getLogger(__name__)

ATOM_NS = "http://www.w3.org/2005/Atom"
GD_NS = "http://schemas.google.com/g/2005"
OPENSEARCH_NS = "http://a9.com/-/spec/opensearchrss/1.0/"

NAMESPACES = {"atom": ATOM_NS, "gd": GD_NS, "openSearch": OPENSEARCH_NS}


@dataclass(frozen=True)
class Contact:
    """A display name (possibly ``None``) and one or more email addresses."""

    name: Optional[str]
    emails: Tuple[str, ...]

    def __iter__(self) -> Iterator[Optional[str]]:
        yield self.name
        yield from self.emails

    @property
    def email(self) -> str:
        return self.emails[0]

    def to_list(self) -> List[Optional[str]]:
        return list(self)


@dataclass
class ContactFeed:
    """Result of a single feed request."""

    contacts: List[Contact] = field(default_factory=list)
    updated_string: Optional[str] = None
    entry_count: int = 0
    total_results: Optional[int] = None
    start_index: Optional[int] = None
    items_per_page: Optional[int] = None

    @cached_property
    def updated_at(self) -> Optional[datetime]:
        return parse_feed_timestamp(self.updated_string)

    def __iter__(self) -> Iterator[Contact]:
        return iter(self.contacts)

    def __len__(self) -> int:
        return len(self.contacts)


def _text(node: Optional[ET.Element]) -> Optional[str]:
    if node is None:
        return None
    return "".join(node.itertext())


def _int_text(root: ET.Element, path: str) -> Optional[int]:
    text = _text(root.find(path, NAMESPACES))
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def parse_entry(entry: ET.Element) -> Optional[Contact]:
    """Return the contact for *entry*, or ``None`` if it has no addresses."""

    emails = tuple(
        node.get("address", "")
        for node in entry.findall("gd:email[@address]", NAMESPACES)
    )
    if not emails:
        return None
    return Contact(name=_text(entry.find("atom:title", NAMESPACES)), emails=emails)


def parse_contacts(body: Union[str, bytes]) -> ContactFeed:
    """Parse a contacts feed document.

    *body* may be text or undecoded bytes; bytes are decoded according to the
    document's XML declaration (UTF-8 when it has none).

    Elements are matched by namespace: the feed, its entries and titles must
    be in the Atom namespace and addresses in the GData one, as Google sends
    them. A feed without an Atom default namespace yields no contacts.
    """

    try:
        root = ET.fromstring(body)
    except (ET.ParseError, LookupError, ValueError) as exc:
        raise FeedParseError(f"Malformed contacts feed: {exc}") from exc

    entries = root.findall("atom:entry", NAMESPACES)
    contacts = []
    for entry in entries:
        contact = parse_entry(entry)
        if contact is not None:
            contacts.append(contact)

    feed = ContactFeed(
        contacts=contacts,
        updated_string=_text(root.find("atom:updated", NAMESPACES)),
        entry_count=len(entries),
        total_results=_int_text(root, "openSearch:totalResults"),
        start_index=_int_text(root, "openSearch:startIndex"),
        items_per_page=_int_text(root, "openSearch:itemsPerPage"),
    )
    logger.info(
        "Parsed contacts feed",
        extra={"entries": feed.entry_count, "contacts": len(contacts)},
    )
    return feed


__all__ = [
    "ATOM_NS",
    "Contact",
    "ContactFeed",
    "GD_NS",
    "NAMESPACES",
    "OPENSEARCH_NS",
    "parse_contacts",
    "parse_entry",
]
