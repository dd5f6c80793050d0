from __future__ import annotations

import re
from collections.abc import Mapping

_SECRET_HEADER_RE = re.compile(r"(TOKEN|KEY|SECRET|AUTH-PW|PASSWORD|AUTHORIZATION)", re.IGNORECASE)
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([^\s]+)")


def redact_string(s: str) -> str:
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}***", s)


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    output = dict(headers)
    for key in list(output.keys()):
        if _SECRET_HEADER_RE.search(str(key)):
            output[key] = "***"
        else:
            output[key] = redact_string(str(output[key]))
    return output
