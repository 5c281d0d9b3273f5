# src/delounce/config.py

"""Settings loaded from environment variables (+ optional .env).

- One Settings object for the whole process.
- Nothing here is required: every field has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "DELOUNCE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Optional[Path]) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Optional[Path]

    # ---- CLI defaults ----
    poll_interval_ms: int
    wait_timeout_ms: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "delounce").strip() or "delounce"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"), None)

        poll_interval_ms = _env_int(_k("POLL_INTERVAL_MS"), 500)
        if poll_interval_ms <= 0:
            poll_interval_ms = 500

        wait_timeout_ms = _env_int(_k("WAIT_TIMEOUT_MS"), 30_000)
        if wait_timeout_ms < 0:
            wait_timeout_ms = 30_000

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            poll_interval_ms=poll_interval_ms,
            wait_timeout_ms=wait_timeout_ms,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
