from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Iterator

service_var: ContextVar[str | None] = ContextVar("service", default=None)
request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar[str | None]] = {
    "service": service_var,
    "request_id": request_id_var,
}


def set_context(**kwargs: str | None) -> dict[str, Token[str | None]]:
    tokens: dict[str, Token[str | None]] = {}
    for key, value in kwargs.items():
        var = _CONTEXT_VARS.get(key)
        if var is None:
            continue
        tokens[key] = var.set(value)
    return tokens


def reset_context(tokens: dict[str, Token[str | None]]) -> None:
    for key, token in tokens.items():
        var = _CONTEXT_VARS.get(key)
        if var is not None:
            var.reset(token)


@contextmanager
def log_context(service: str | None = None, request_id: str | None = None) -> Iterator[None]:
    tokens = set_context(service=service, request_id=request_id)
    try:
        yield
    finally:
        reset_context(tokens)


def get_log_context() -> dict[str, str]:
    values = {
        "service": service_var.get(),
        "request_id": request_id_var.get(),
    }
    return {key: value for key, value in values.items() if value is not None}
