from __future__ import annotations

import logging
import os
from typing import Iterable

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# chatty HTTP client loggers are capped at WARNING unless we run at DEBUG
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(default_level: str | None = None, *, noisy: Iterable[str] = NOISY_LOGGERS) -> None:
    level_name = (default_level or os.getenv("APP_LOG_LEVEL") or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format=os.getenv("APP_LOG_FORMAT") or DEFAULT_FORMAT,
    )
    if level > logging.DEBUG:
        for name in noisy:
            logging.getLogger(name).setLevel(max(level, logging.WARNING))
