"""Helpers for undoing transport-level compression on streamed responses."""

from __future__ import annotations

import gzip
import zlib
from typing import Union

import httpx

from ..errors import DecompressionError, FeedParseError

GZIP_ENCODINGS = frozenset({"gzip", "x-gzip"})


def decompress_gzip(payload: bytes) -> bytes:
    """Return the inflated bytes of a gzip *payload*."""

    try:
        return gzip.decompress(payload)
    except (OSError, EOFError, zlib.error) as exc:
        raise DecompressionError(f"Invalid gzip payload: {exc}") from exc


def response_content(response: httpx.Response) -> bytes:
    """Return the raw bytes of a streamed *response*, gunzipped if needed.

    httpx's automatic content decoding is bypassed so a
    ``Content-Encoding: gzip`` body is inflated here; any other body is passed
    through unchanged.
    """

    raw = b"".join(response.iter_raw())
    encoding = response.headers.get("Content-Encoding", "").strip().lower()
    if encoding in GZIP_ENCODINGS:
        raw = decompress_gzip(raw)
    return raw


def response_body(response: httpx.Response) -> Union[str, bytes]:
    """Return the body of a streamed *response* for the XML parser.

    The body is text when ``Content-Type`` names a charset. Otherwise the
    bytes are returned as-is so the document's own encoding declaration
    applies.
    """

    content = response_content(response)
    charset = response.charset_encoding
    if charset is None:
        return content
    try:
        return content.decode(charset)
    except (LookupError, UnicodeDecodeError) as exc:
        raise FeedParseError(f"Response body is not valid {charset}: {exc}") from exc


__all__ = ["GZIP_ENCODINGS", "decompress_gzip", "response_body", "response_content"]
