from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

import httpx

from svcclient.config import ClientConfig
from svcclient.core.logging.redact import redact_headers

from .classifier import CallResult

logger = logging.getLogger("svcclient.http")

CONNECT_FAILED_STATUS = -1


def _parse_json(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


def _to_result(response: httpx.Response) -> CallResult:
    return CallResult(status=response.status_code, parsed_body=_parse_json(response), raw_body=response.text)


class HttpService:
    """JSON-over-HTTP transport returning ``CallResult`` tuples.

    Transport failures never raise: they are reported as status ``-1`` so the
    classifier decides what the caller sees. Headers set with ``add_header``
    or ``with_headers`` apply to every later request made through this
    instance.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.Client | None = None,
        async_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.headers: dict[str, str] = {"User-Agent": self.config.user_agent}
        self._client = client
        self._async_client = async_client
        self._lock = threading.Lock()

    def _timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.config.timeout_s)

    @property
    def client(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout())
        return self._client

    @property
    def async_client(self) -> httpx.AsyncClient:
        if self._async_client is None:
            self._async_client = httpx.AsyncClient(timeout=self._timeout())
        return self._async_client

    def add_header(self, key: str, value: str) -> "HttpService":
        self.headers[key] = value
        return self

    def with_headers(self, headers: Mapping[str, str | None]) -> "HttpService":
        for key, value in headers.items():
            self.headers[key] = "" if value is None else str(value)
        return self

    def get(self, url: str, params: Mapping[str, Any] | None = None) -> CallResult:
        return self._send("GET", url, params=params)

    def post(self, url: str, data: Any = None, params: Mapping[str, Any] | None = None) -> CallResult:
        return self._send("POST", url, data=data, params=params)

    def put(self, url: str, data: Any = None, params: Mapping[str, Any] | None = None) -> CallResult:
        return self._send("PUT", url, data=data, params=params)

    async def post_async(self, url: str, data: Any = None, params: Mapping[str, Any] | None = None) -> CallResult:
        self._log_request("POST", url)
        try:
            response = await self.async_client.request(
                "POST",
                url,
                headers=dict(self.headers),
                params=dict(params) if params else None,
                json=data,
            )
        except httpx.HTTPError as exc:
            return self._connect_failed("POST", url, exc)
        return _to_result(response)

    def close(self) -> None:
        """Close the sync client. The async client needs ``aclose()``."""
        if self._client is not None:
            self._client.close()

    async def aclose(self) -> None:
        """Close both clients."""
        self.close()
        if self._async_client is not None:
            await self._async_client.aclose()

    def __enter__(self) -> "HttpService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    async def __aenter__(self) -> "HttpService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _send(
        self,
        method: str,
        url: str,
        *,
        data: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> CallResult:
        self._log_request(method, url)
        try:
            response = self.client.request(
                method,
                url,
                headers=dict(self.headers),
                params=dict(params) if params else None,
                json=data,
            )
        except httpx.HTTPError as exc:
            return self._connect_failed(method, url, exc)
        return _to_result(response)

    def _log_request(self, method: str, url: str) -> None:
        logger.debug(
            "http_request",
            extra={"extra_fields": {"method": method, "url": url, "headers": redact_headers(self.headers)}},
        )

    def _connect_failed(self, method: str, url: str, exc: httpx.HTTPError) -> CallResult:
        logger.debug(
            "http_request_failed",
            extra={"extra_fields": {"method": method, "url": url, "error": exc.__class__.__name__}},
        )
        return CallResult(status=CONNECT_FAILED_STATUS, parsed_body=None, raw_body="")
