"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s - %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_GENDER = "male"


def log_level() -> int:
    """Level named by SIZHU_LOG_LEVEL, falling back to WARNING on unknown names."""
    name = os.getenv("SIZHU_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.getLevelName(DEFAULT_LOG_LEVEL)
    return level


def default_gender() -> str:
    """SIZHU_DEFAULT_GENDER as given; the tag is opaque, so only a blank value falls back."""
    value = os.getenv("SIZHU_DEFAULT_GENDER", "").strip()
    return value or DEFAULT_GENDER


def configure_logging(level: int | None = None) -> None:
    logging.basicConfig(
        level=level if level is not None else log_level(),
        format=LOG_FORMAT,
    )
