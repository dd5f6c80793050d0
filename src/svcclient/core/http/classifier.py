from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from .errors import ClientError, ServerError, ServiceError

NOT_FOUND_EXCEPTION = "Symfony\\Component\\HttpKernel\\Exception\\NotFoundHttpException"

CONNECT_FAILED_MESSAGE = "Could not connect to API"
NON_JSON_SUCCESS_MESSAGE = "Server responded with a non-JSON response"
NON_JSON_ERROR_MESSAGE = "Responded with a non-JSON error"
INVALID_ENDPOINT_MESSAGE = "Invalid API endpoint."
UNHANDLED_ERROR_MESSAGE = "Unhandled error occurred!"
UNKNOWN_STATUS_MESSAGE = "responded with unknown status code."


@dataclass(frozen=True)
class CallResult:
    status: int
    parsed_body: Any = None
    raw_body: str = ""


@dataclass(frozen=True)
class Ok:
    value: Any

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Any:
        return self.value


@dataclass(frozen=True)
class Err:
    error: ServiceError
    notify: bool = True

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise self.error


Outcome = Union[Ok, Err]


def _field(body: Any, key: str, default: Any = None) -> Any:
    if isinstance(body, Mapping):
        return body.get(key, default)
    return default


def classify(url: str, result: CallResult, service_name: str) -> Outcome:
    """Map a transport result to a success value or a typed error.

    The rules are checked in order; the first match wins. ``Err.notify`` is
    false for connection failures and unknown status codes, which never reach
    the error hook.
    """
    status = result.status
    body = result.parsed_body
    raw = result.raw_body

    def _error(cls: type[ServiceError], message: str, context: Any = None) -> ServiceError:
        return cls(message, status=status, url=url, service_name=service_name, context=context)

    if status == -1:
        return Err(_error(ServerError, CONNECT_FAILED_MESSAGE), notify=False)

    if 200 <= status < 400:
        if body is None:
            return Ok({"server-response": {"message": NON_JSON_SUCCESS_MESSAGE, "raw_response": raw}})
        return Ok(body)

    if body is None and status >= 400:
        return Err(_error(ServerError, NON_JSON_ERROR_MESSAGE, {"raw_response": raw}))

    if 400 <= status < 500:
        message = _field(body, "message")
        context = None
        if _field(body, "exception") == NOT_FOUND_EXCEPTION:
            message = INVALID_ENDPOINT_MESSAGE
        if status == 422:
            message = f"Invalid data sent to {service_name}."
            errors = _field(body, "errors")
            if errors is not None:
                context = {"errors": errors}
        return Err(_error(ClientError, "" if message is None else str(message), context))

    if status >= 500:
        message = _field(body, "message")
        if message is None:
            message = UNHANDLED_ERROR_MESSAGE
        return Err(_error(ServerError, str(message), _field(body, "debug")))

    return Err(_error(ServerError, UNKNOWN_STATUS_MESSAGE, {"raw_response": raw}), notify=False)
