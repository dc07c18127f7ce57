"""Shared synchronous HTTP client utilities."""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Iterator, Mapping, Optional

import httpx

from ..errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT = 5.0
DEFAULT_READ_TIMEOUT = 20.0
DEFAULT_TOTAL_TIMEOUT = 30.0


class HTTP:
    """Wrapper around :class:`httpx.Client` that maps transport failures.

    Every call is a single request/response cycle; failures surface
    immediately as :class:`~gcontacts.errors.TransportError`.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        verify: bool = True,
        follow_redirects: bool = True,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        total_timeout = timeout or DEFAULT_TOTAL_TIMEOUT
        self.verify = verify
        if not verify:
            logger.warning(
                "TLS certificate verification disabled",
                extra={"base_url": base_url},
            )
        self._client = httpx.Client(
            base_url=base_url or "",
            headers=dict(headers or {}),
            timeout=httpx.Timeout(
                total_timeout,
                connect=min(DEFAULT_CONNECT_TIMEOUT, total_timeout),
                read=min(DEFAULT_READ_TIMEOUT, total_timeout),
            ),
            verify=verify,
            follow_redirects=follow_redirects,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Any] = None,
        content: Optional[Any] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        logger.debug("HTTP request", extra={"method": method, "url": url})
        kwargs: dict = {"params": params, "data": data, "headers": headers}
        if content is not None:
            kwargs["content"] = content
        try:
            return self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    @contextlib.contextmanager
    def stream(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Iterator[httpx.Response]:
        """Yield a response whose body has not been read or decoded yet."""

        logger.debug("HTTP stream", extra={"method": method, "url": url})
        try:
            with self._client.stream(method, url, headers=headers) as response:
                yield response
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    def get(self, url: str, **kw: Any) -> httpx.Response:
        return self.request("GET", url, **kw)

    def post(self, url: str, **kw: Any) -> httpx.Response:
        return self.request("POST", url, **kw)
