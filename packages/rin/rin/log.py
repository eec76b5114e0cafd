"""Logging configuration helper."""

from __future__ import annotations

import logging
from typing import TextIO

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str | int = "INFO", stream: TextIO | None = None) -> None:
    """Route all rin loggers to a single stream handler."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
