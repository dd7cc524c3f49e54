# logging_utils.py
"""
Logging for the gamelog scraper.

Modules log through get_logger(__name__), so extraction diagnostics land
under "bbref.gamelog" and crawl progress under "bbref.crawl". The CLI
calls setup_logging once with the level and log file from Settings.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure the root logger once per process.

    Console output always; a UTF-8 log file as well when log_file is given.
    Later calls are no-ops.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=_coerce_level(level),
        handlers=handlers,
        force=True,
    )

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Named logger; pass __name__ so records carry the bbref module path."""
    return logging.getLogger(name)
