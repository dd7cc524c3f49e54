from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .logging_utils import get_logger

logger = get_logger(__name__)

ENV_PREFIX = "BBREF_"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_13_6) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/95.0.4638.69 Safari/537.36"
)


def _default_output_dir() -> Path:
    return Path("output") / "gamelogs"


class Settings(BaseModel):
    season: str = "2022"
    base_url: str = "https://www.basketball-reference.com"
    output_dir: Path = Field(default_factory=_default_output_dir)
    index_filename: str = "index.json"
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = 4
    request_delay: float = 0.0
    random_delay: float = 5.0
    request_timeout: int = 30
    log_file: Optional[str] = None
    log_level: str = "INFO"

    @property
    def teams_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/teams/"

    @property
    def index_path(self) -> Path:
        return self.output_dir / self.index_filename


def _env_str(name: str) -> Optional[str]:
    val = os.environ.get(ENV_PREFIX + name)
    if val is None or not val.strip():
        return None
    return val.strip()


def _env_int(name: str) -> Optional[int]:
    val = _env_str(name)
    if val is None:
        return None
    try:
        return int(val)
    except ValueError:
        logger.warning("Ignoring invalid integer for %s%s=%r", ENV_PREFIX, name, val)
        return None


def _env_float(name: str) -> Optional[float]:
    val = _env_str(name)
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        logger.warning("Ignoring invalid number for %s%s=%r", ENV_PREFIX, name, val)
        return None


def settings_from_env() -> Settings:
    """
    Build Settings from BBREF_* environment variables.
    Unset or invalid values fall back to the model defaults.
    """
    overrides = {
        "season": _env_str("SEASON"),
        "base_url": _env_str("BASE_URL"),
        "output_dir": _env_str("OUTPUT_DIR"),
        "user_agent": _env_str("USER_AGENT"),
        "log_file": _env_str("LOG_FILE"),
        "log_level": _env_str("LOG_LEVEL"),
        "max_workers": _env_int("MAX_WORKERS"),
        "request_timeout": _env_int("REQUEST_TIMEOUT"),
        "request_delay": _env_float("REQUEST_DELAY"),
        "random_delay": _env_float("RANDOM_DELAY"),
    }
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


@lru_cache()
def get_settings() -> Settings:
    return settings_from_env()
