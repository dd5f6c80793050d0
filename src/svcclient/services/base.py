from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urljoin

from pydantic import BaseModel

from svcclient.config import ClientConfig
from svcclient.core.http.classifier import CallResult, Err, Outcome, classify
from svcclient.core.http.transport import HttpService
from svcclient.core.logging.context import log_context

logger = logging.getLogger("svcclient.services")

ErrorHook = Callable[[str, int, Any, str], None]


def _noop_error_hook(url: str, status: int, parsed_body: Any, raw_body: str) -> None:
    return None


def _is_absolute_url(url: str) -> bool:
    return url.startswith(("http://", "https://"))


def _payload(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", exclude_none=True)
    if isinstance(data, Mapping):
        return dict(data)
    return data


class ServiceClient:
    """Facade over one remote API resource.

    Every verb builds the target URL, hands it to the transport, classifies
    the result and either returns the success value or raises
    ``ClientError``/``ServerError``.
    """

    def __init__(
        self,
        transport: HttpService,
        config: ClientConfig,
        *,
        name: str,
        base_path: str,
        config_key: str | None = None,
        error_hook: ErrorHook | None = None,
    ) -> None:
        self.transport = transport
        self.config = config
        self.name = name
        self.base_path = base_path
        self.config_key = config_key
        self.error_hook: ErrorHook = error_hook or _noop_error_hook

    @property
    def base_url(self) -> str:
        return self.config.service_uri(self.config_key) or self.base_path

    def build_url(self, path: str, is_absolute: bool = False) -> str:
        if is_absolute:
            return path
        url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}" if path else self.base_url
        if _is_absolute_url(url) or not self.config.api_base_url:
            return url
        return urljoin(self.config.api_base_url.rstrip("/") + "/", url.lstrip("/"))

    def set_client_credentials_auth(self) -> None:
        credentials = self.config.client_credentials
        self.transport.with_headers(
            {
                "PHP-AUTH-USER": credentials.username,
                "PHP-AUTH-PW": credentials.password,
            }
        )

    def get(self, path: str, params: Mapping[str, Any] | None = None, is_absolute: bool = False) -> Any:
        self.transport.add_header("Accept", "application/json")
        url = self.build_url(path, is_absolute)
        return self.handle_response(url, self.transport.get(url, params))

    def post(self, path: str, data: Any, params: Mapping[str, Any] | None = None, is_absolute: bool = False) -> Any:
        url = self.build_url(path, is_absolute)
        return self.handle_response(url, self.transport.post(url, _payload(data), params))

    async def post_async(
        self,
        path: str,
        data: Any,
        params: Mapping[str, Any] | None = None,
        is_absolute: bool = False,
    ) -> Any:
        url = self.build_url(path, is_absolute)
        result = await self.transport.post_async(url, _payload(data), params)
        return self.handle_response(url, result)

    def put(self, path: str, data: Any, params: Mapping[str, Any] | None = None) -> Any:
        url = self.build_url(path)
        return self.handle_response(url, self.transport.put(url, _payload(data), params))

    def classify(self, url: str, result: CallResult) -> Outcome:
        return classify(url, result, self.name)

    def handle_response(self, url: str, result: CallResult) -> Any:
        outcome = self.classify(url, result)
        if isinstance(outcome, Err):
            with log_context(service=self.name):
                logger.debug(
                    "service_call_classified",
                    extra={"extra_fields": {"url": url, "status": result.status, "error": type(outcome.error).__name__}},
                )
            if outcome.notify:
                self.error_hook(url, result.status, result.parsed_body, result.raw_body)
        return outcome.unwrap()
