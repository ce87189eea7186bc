"""Logging for the ``transactions_to_notion`` package.

Modules log through ``get_logger("transactions_to_notion.<module>")`` and never
attach handlers themselves. The CLI calls :func:`configure_logging` once at
startup, which sends the package's records to stderr.
"""

from __future__ import annotations

import logging
import os

_PKG_LOGGER_NAME = "transactions_to_notion"
_LEVEL_ENV_VAR = "TRANSACTIONS_TO_NOTION_LOG_LEVEL"
_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_CONFIGURED = False


def _resolve_level(level: int | str | None) -> int:
    """``level`` if recognizable, else the env var, else ``INFO``."""

    for candidate in (level, os.getenv(_LEVEL_ENV_VAR)):
        if isinstance(candidate, int):
            return candidate
        if not candidate:
            continue
        name = candidate.strip().upper()
        if name.isdigit():
            return int(name)
        value = logging.getLevelNamesMapping().get(name)
        if value is not None:
            return value
    return logging.INFO


def configure_logging(level: int | str | None = None) -> None:
    """Attach a stderr handler to the package logger; later calls do nothing."""

    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
