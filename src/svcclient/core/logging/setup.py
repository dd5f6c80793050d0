from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from svcclient.config import ClientConfig

from .json_formatter import JSONFormatter

_LOGGER_NAME = "svcclient"
_CONFIGURED_ATTR = "_svcclient_json_logging"


def _parse_level(raw: str) -> int:
    normalized = raw.strip().upper()
    return getattr(logging, normalized, logging.INFO)


def configure_logging(config: ClientConfig) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(_parse_level(config.logging.level))
    logger.propagate = False

    formatter = JSONFormatter()

    if not any(getattr(handler, _CONFIGURED_ATTR, False) for handler in logger.handlers):
        stdout_handler = logging.StreamHandler(stream=sys.stdout)
        stdout_handler.setFormatter(formatter)
        setattr(stdout_handler, _CONFIGURED_ATTR, True)
        logger.addHandler(stdout_handler)

    if config.logging.to_file:
        log_dir = Path(config.logging.dir or (Path.home() / ".svcclient" / "logs")).expanduser()
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / "svcclient.log"

        file_exists = any(
            isinstance(handler, RotatingFileHandler)
            and getattr(handler, _CONFIGURED_ATTR, False)
            and Path(handler.baseFilename) == log_path
            for handler in logger.handlers
        )
        if not file_exists:
            file_handler = RotatingFileHandler(
                filename=log_path,
                maxBytes=config.logging.max_bytes,
                backupCount=config.logging.backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            setattr(file_handler, _CONFIGURED_ATTR, True)
            logger.addHandler(file_handler)

    return logger
