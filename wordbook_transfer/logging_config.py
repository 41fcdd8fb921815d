"""Logging configuration for the transfer layer.

Everything is attached to the ``wordbook_transfer`` logger, so module loggers
(``wordbook_transfer.formats.json_codec`` and so on) inherit both handlers.
Python warnings are written to the log file only.
"""

from __future__ import annotations

import logging

from .config import LOGGER_NAME, AppConfig

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
FILE_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(module)s:%(lineno)d | "
    "%(funcName)s | %(message)s"
)
WARNINGS_LOGGER_NAME = "py.warnings"


def _handler_name(kind: str) -> str:
    return f"{LOGGER_NAME}.{kind}"


def _detach_own_handlers(logger: logging.Logger) -> None:
    """Remove handlers installed by an earlier ``setup_logging`` call."""
    prefix = f"{LOGGER_NAME}."
    for handler in list(logger.handlers):
        if (handler.get_name() or "").startswith(prefix):
            logger.removeHandler(handler)
            handler.close()


def _build_handler(handler: logging.Handler, kind: str, level: str, fmt: str) -> logging.Handler:
    handler.set_name(_handler_name(kind))
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(config: AppConfig) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    warnings_logger = logging.getLogger(WARNINGS_LOGGER_NAME)
    _detach_own_handlers(warnings_logger)
    _detach_own_handlers(logger)

    console_handler = _build_handler(
        logging.StreamHandler(), "console", config.log_level, CONSOLE_FORMAT
    )
    file_handler = _build_handler(
        logging.FileHandler(config.log_file, encoding="utf-8"),
        "file",
        config.file_log_level,
        FILE_FORMAT,
    )
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)

    logging.captureWarnings(True)
    warnings_logger.setLevel(logging.DEBUG)
    warnings_logger.propagate = False
    warnings_logger.addHandler(file_handler)

    logger.debug("Logging to %s", config.log_file)
    return logger
