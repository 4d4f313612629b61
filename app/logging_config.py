"""Logging setup for the API process."""

from __future__ import annotations

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class _ContextFormatter(logging.Formatter):
    """Append request_id/stage from ``extra`` when a record carries them."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = [f"{key}={getattr(record, key)}" for key in ("request_id", "stage") if getattr(record, key, None)]
        if context:
            return f"{message} [{' '.join(context)}]"
        return message


def configure_logging(level: int | str = logging.INFO, format_string: str | None = None) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_ContextFormatter(format_string or DEFAULT_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
