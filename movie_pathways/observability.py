"""Logging setup for the application entry points.

Library modules only ever call ``logging.getLogger(__name__)`` and pass
context through ``extra={...}``. Entry points (the Gradio app, scripts)
call ``configure_logging`` once to decide how those records look.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from .config import ObservabilityConfig, get_config

PACKAGE_LOGGER = "movie_pathways"

# Attributes every LogRecord carries; anything else came in via ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RECORD_ATTRS and not key.startswith("_")
    }


class ExtraFormatter(logging.Formatter):
    """Plain text formatter that appends ``extra`` fields as key=value."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = _extra_fields(record)
        if not extras:
            return base
        tail = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} | {tail}"


class JSONFormatter(logging.Formatter):
    """One JSON object per record, ``extra`` fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


def configure_logging(config: Optional[ObservabilityConfig] = None) -> logging.Logger:
    """Attach a single handler to the package logger.

    Calling this again replaces the handler installed previously.

    Args:
        config: Logging configuration, defaults to the application config.

    Returns:
        The configured package logger.
    """
    config = config or get_config().observability
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in list(logger.handlers):
        if getattr(handler, "_movie_pathways", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._movie_pathways = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(ExtraFormatter(config.format))

    logger.addHandler(handler)
    logger.setLevel(config.level.upper())
    return logger
