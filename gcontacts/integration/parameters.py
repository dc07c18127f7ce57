"""Translation of client-side fetch options to contacts feed query parameters."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Mapping

from ..utils.datetime_formatting import format_updated_min

WIRE_KEYS: Mapping[str, str] = MappingProxyType(
    {
        "limit": "max-results",
        "offset": "start-index",
        "order": "orderby",
        "descending": "sortorder",
        "updated_after": "updated-min",
    }
)


def translate_parameters(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new mapping of feed parameters for *options*.

    * ``limit`` -- ``max-results``
    * ``offset`` -- 0-based, sent as the 1-based ``start-index``
    * ``order`` -- ``orderby``; implies ``sortorder=descending`` unless
      ``descending`` is given
    * ``descending`` -- ``sortorder`` of ``descending`` or ``ascending``
    * ``updated_after`` -- ``updated-min``, datetimes are formatted
    * anything else is passed through under its own name

    ``None`` values are dropped.
    """

    translated: Dict[str, Any] = {}
    for key, value in options.items():
        if value is None:
            continue
        if key == "offset":
            value = int(value) + 1
        elif key == "order":
            if options.get("descending") is None:
                translated["sortorder"] = "descending"
        elif key == "descending":
            value = "descending" if value else "ascending"
        elif key == "updated_after":
            value = format_updated_min(value)
        translated[WIRE_KEYS.get(key, key)] = value
    return translated


__all__ = ["WIRE_KEYS", "translate_parameters"]
