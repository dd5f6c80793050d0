from __future__ import annotations

import json
import logging
import traceback
from datetime import datetime, timezone

from svcclient.core.http.errors import ServiceError

from .context import get_log_context


def _service_error_fields(error: ServiceError) -> dict[str, object]:
    fields: dict[str, object] = {
        "service": error.service_name,
        "status": error.status,
        "url": error.url,
        "error_message": error.message,
    }
    if error.context is not None:
        fields["error_context"] = error.context
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per line; service errors are flattened into fields."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts_iso_utc": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(get_log_context())

        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            payload.update(extra_fields)

        if record.exc_info:
            exc_type, exc_value, exc_tb = record.exc_info
            payload["exc_type"] = exc_type.__name__ if exc_type else "Exception"
            if isinstance(exc_value, ServiceError):
                payload.update(_service_error_fields(exc_value))
            else:
                payload["exc_msg"] = str(exc_value) if exc_value else ""
                payload["stack"] = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)
