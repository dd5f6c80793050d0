from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from svcclient.config import ClientConfig, LoggingConfig
from svcclient.core.logging.setup import configure_logging


def test_configure_logging_is_idempotent(tmp_path) -> None:
    logger = logging.getLogger("svcclient")
    logger.handlers = []

    configure_logging(ClientConfig())
    first_count = len(logger.handlers)

    configure_logging(ClientConfig())
    assert len(logger.handlers) == first_count


def test_configure_logging_adds_rotating_file_handler(tmp_path) -> None:
    logger = logging.getLogger("svcclient")
    logger.handlers = []

    config = ClientConfig(logging=LoggingConfig(level="debug", to_file=True, dir=str(tmp_path)))
    configure_logging(config)
    configure_logging(config)

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    assert len(file_handlers) == 1
    assert (tmp_path / "svcclient.log").exists()
    assert logger.level == logging.DEBUG

    for handler in file_handlers:
        handler.close()
    logger.handlers = []


def test_rotation_limits_come_from_logging_config(tmp_path) -> None:
    logger = logging.getLogger("svcclient")
    logger.handlers = []

    config = ClientConfig(logging=LoggingConfig(to_file=True, dir=str(tmp_path), max_bytes=1024, backup_count=2))
    configure_logging(config)

    file_handler = next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))
    assert file_handler.maxBytes == 1024
    assert file_handler.backupCount == 2

    file_handler.close()
    logger.handlers = []
