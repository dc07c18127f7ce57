"""Test configuration helpers and shared fixtures."""

from __future__ import annotations

import gzip
import os
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SETTINGS_SKIP_DOTENV", "1")

SETTINGS_ENV = (
    "GOOGLE_CLIENT_LOGIN_SOURCE",
    "CONTACTS_SOURCE",
    "GOOGLE_VERIFY_SSL",
    "GOOGLE_REQUEST_TIMEOUT",
    "GOOGLE_CONTACTS_PROJECTION",
    "GOOGLE_CONTACTS_PAGE_SIZE",
    "GOOGLE_AUTH_TOKEN",
    "GOOGLE_USER_ID",
    "LOG_LEVEL",
)

SAMPLE_FEED = """<?xml version='1.0' encoding='UTF-8'?>
<feed xmlns='http://www.w3.org/2005/Atom'
      xmlns:openSearch='http://a9.com/-/spec/opensearchrss/1.0/'
      xmlns:gd='http://schemas.google.com/g/2005'>
  <id>http://www.google.com/m8/feeds/contacts/default/thin</id>
  <updated>2008-03-05T12:36:38.836Z</updated>
  <title type='text'>Contacts</title>
  <openSearch:totalResults>4</openSearch:totalResults>
  <openSearch:startIndex>1</openSearch:startIndex>
  <openSearch:itemsPerPage>200</openSearch:itemsPerPage>
  <entry>
    <updated>2008-03-05T12:36:38.835Z</updated>
    <title type='text'>Fitzgerald</title>
    <gd:email rel='http://schemas.google.com/g/2005#other' address='fubar@gmail.com' />
    <gd:email rel='http://schemas.google.com/g/2005#work' address='fubar@example.com' />
  </entry>
  <entry>
    <title type='text'>Nobody Home</title>
    <gd:phoneNumber>+1 555 0100</gd:phoneNumber>
  </entry>
  <entry>
    <gd:email address='anonymous@example.com' />
    <gd:email rel='http://schemas.google.com/g/2005#other' />
  </entry>
  <entry>
    <title type='text'>William Paginate</title>
    <gd:email address='will.paginate@gmail.com' primary='true' />
  </entry>
</feed>
"""


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    for key in SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def settings():
    from gcontacts.config.config import Settings

    return Settings()


@pytest.fixture
def sample_feed() -> str:
    return SAMPLE_FEED


def _gzip_bytes(text: str) -> bytes:
    return gzip.compress(text.encode("utf-8"))


def _make_response(
    status_code: int = 200,
    body: bytes = b"",
    headers: Optional[Dict[str, str]] = None,
) -> httpx.Response:
    """Build a response whose body is still unread, as a streamed one would be."""

    return httpx.Response(status_code, headers=headers, stream=httpx.ByteStream(body))


class RecordingTransport(httpx.MockTransport):
    """Mock transport that keeps every request it has served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            request.read()
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def recording_transport():
    def _factory(*responses: httpx.Response) -> RecordingTransport:
        queue = list(responses)

        def _handler(request: httpx.Request) -> httpx.Response:
            assert queue, f"Unexpected request to {request.url}"
            return queue.pop(0)

        return RecordingTransport(_handler)

    return _factory


@pytest.fixture
def gzip_bytes():
    return _gzip_bytes


@pytest.fixture
def make_response():
    return _make_response
