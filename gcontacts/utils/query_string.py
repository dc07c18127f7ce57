"""Canonical ``application/x-www-form-urlencoded`` encoding of parameter mappings."""

from __future__ import annotations

from functools import singledispatch
from typing import Any, Mapping
from urllib.parse import quote_plus


@singledispatch
def encode_value(value: Any) -> str:
    """Return the wire representation of *value* before percent-encoding."""

    return str(value)


@encode_value.register
def _(value: bool) -> str:
    return "1" if value else "0"


def query_string(params: Mapping[Any, Any]) -> str:
    """Build ``key=value&...`` from *params*, preserving insertion order.

    ``None`` values drop their pair, booleans become ``1``/``0`` and every key
    and value is percent-encoded (``/`` included, spaces as ``+``).
    """

    pairs = []
    for key, value in params.items():
        if value is None:
            continue
        encoded_key = quote_plus(str(key), safe="")
        pairs.append(f"{encoded_key}={quote_plus(encode_value(value), safe='')}")

    return "&".join(pairs)


__all__ = ["encode_value", "query_string"]
