"""Helpers for the timestamps exchanged with the contacts feed."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

UPDATED_MIN_FORMAT = "%Y-%m-%dT%H:%M:%S%Z"


def parse_feed_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Normalise an Atom ``updated`` string to an aware :class:`datetime`.

    Unparseable inputs yield ``None`` so calling code can fall back to the raw
    string.
    """

    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        candidate = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None

    if candidate.tzinfo is None:
        candidate = candidate.replace(tzinfo=timezone.utc)

    return candidate


def format_updated_min(value: Any) -> Any:
    """Render *value* for the ``updated-min`` feed parameter.

    Anything with ``strftime`` is formatted as ``YYYY-MM-DDTHH:MM:SS<TZ>``;
    other values (pre-formatted strings) are passed through untouched.
    """

    if hasattr(value, "strftime"):
        return value.strftime(UPDATED_MIN_FORMAT)
    return value


__all__ = ["UPDATED_MIN_FORMAT", "format_updated_min", "parse_feed_timestamp"]
