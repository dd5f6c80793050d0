from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("svcclient.errors")


def log_error_hook(url: str, status: int, parsed_body: Any, raw_body: str) -> None:
    """Error hook that records a failed service call as a structured warning."""
    logger.warning(
        "service_call_failed",
        extra={
            "extra_fields": {
                "url": url,
                "status": status,
                "json": parsed_body is not None,
                "raw_len": len(raw_body or ""),
            }
        },
    )
