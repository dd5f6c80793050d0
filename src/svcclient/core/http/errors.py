from __future__ import annotations

from typing import Any


def format_error_message(service_name: str, url: str, status: int, message: str) -> str:
    return f"[{service_name}] status={status} url={url} message={message}"


class ServiceError(RuntimeError):
    """Base error for classified service responses."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        url: str,
        service_name: str,
        context: Any = None,
    ) -> None:
        super().__init__(format_error_message(service_name, url, status, message))
        self.message = message
        self.status = status
        self.url = url
        self.service_name = service_name
        self.context = context

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (
            self.message == other.message
            and self.status == other.status
            and self.url == other.url
            and self.service_name == other.service_name
            and self.context == other.context
        )

    def __hash__(self) -> int:
        # context may be an unhashable mapping; equal errors still agree on the rest
        return hash((type(self), self.message, self.status, self.url, self.service_name))


class ClientError(ServiceError):
    """Raised for 4xx responses the caller can fix."""


class ServerError(ServiceError):
    """Raised for 5xx responses, connection failures and malformed responses."""
