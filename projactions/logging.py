"""Logging utilities for projactions commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "projactions"


class _ActionFilter(logging.Filter):
    """Stamps every record with the action the process was started for."""

    def __init__(self, action: str | None) -> None:
        super().__init__()
        self.action = action or "-"

    def filter(self, record: logging.LogRecord) -> bool:
        record.action = self.action
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the projactions hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    action: str | None = None,
) -> logging.Logger:
    """Send projactions records to stderr, and to ``log_file`` when given.

    Console lines read ``[projactions compile] INFO Running `make` in ...``;
    the file sink adds a timestamp and the emitting module.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    action_filter = _ActionFilter(action)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.addFilter(action_filter)
    stream_handler.setFormatter(
        logging.Formatter("[projactions %(action)s] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.addFilter(action_filter)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s %(name)s [%(action)s]: %(message)s"
            )
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
