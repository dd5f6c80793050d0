from __future__ import annotations

"""Configuration loader for svcclient."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

_ENV_PREFIX = "SVCCLIENT_"
_SERVICE_URI_PREFIX = f"{_ENV_PREFIX}SERVICE_URI_"


class ConfigError(ValueError):
    pass


class ClientCredentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class LoggingConfig(BaseModel):
    level: str = "INFO"
    to_file: bool = False
    dir: Optional[str] = None
    max_bytes: int = Field(5_000_000, gt=0)
    backup_count: int = Field(5, ge=0)


class ClientConfig(BaseModel):
    api_base_url: str = ""
    timeout_s: float = Field(15.0, gt=0)
    user_agent: str = "svcclient/0.1"
    client_credentials: ClientCredentials = Field(default_factory=ClientCredentials)
    service_uris: dict[str, str] = Field(default_factory=dict)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def lookup(self, key: str) -> Optional[str]:
        """Resolve a dotted key such as ``client_credentials.username``."""
        node: Any = self
        for part in key.split("."):
            if isinstance(node, BaseModel):
                node = getattr(node, part, None)
            elif isinstance(node, dict):
                node = node.get(part)
            else:
                return None
            if node is None:
                return None
        if isinstance(node, (BaseModel, dict)):
            return None
        return str(node)

    def service_uri(self, key: str | None) -> Optional[str]:
        if not key:
            return None
        return self.service_uris.get(key) or None


def _env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    merged = dict(data)
    simple = {
        "API_BASE_URL": ("api_base_url",),
        "TIMEOUT_S": ("timeout_s",),
        "USER_AGENT": ("user_agent",),
        "USERNAME": ("client_credentials", "username"),
        "PASSWORD": ("client_credentials", "password"),
        "LOG_LEVEL": ("logging", "level"),
        "LOG_TO_FILE": ("logging", "to_file"),
        "LOG_DIR": ("logging", "dir"),
        "LOG_MAX_BYTES": ("logging", "max_bytes"),
        "LOG_BACKUP_COUNT": ("logging", "backup_count"),
    }
    for suffix, path in simple.items():
        raw = os.getenv(f"{_ENV_PREFIX}{suffix}")
        if raw is None:
            continue
        if len(path) == 1:
            merged[path[0]] = raw
        else:
            section = dict(merged.get(path[0]) or {})
            section[path[1]] = raw
            merged[path[0]] = section

    uris = dict(merged.get("service_uris") or {})
    for name, value in os.environ.items():
        if name.startswith(_SERVICE_URI_PREFIX) and value:
            uris[name[len(_SERVICE_URI_PREFIX):].lower()] = value
    if uris:
        merged["service_uris"] = uris
    return merged


def load_config(path: Optional[str] = None) -> ClientConfig:
    """Load configuration from YAML (optional) and apply SVCCLIENT_* overrides."""
    data: dict[str, Any] = {}
    cfg_path = Path(path) if path else None
    if cfg_path is None and os.getenv(f"{_ENV_PREFIX}CONFIG"):
        cfg_path = Path(os.environ[f"{_ENV_PREFIX}CONFIG"]).expanduser()
    if cfg_path is not None:
        try:
            with cfg_path.open("r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"could not read config {cfg_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"config {cfg_path} must be a mapping")
    try:
        return ClientConfig.model_validate(_env_overrides(data))
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
