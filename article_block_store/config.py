"""Environment-driven settings and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DOTENV_PATH = PROJECT_ROOT / ".env"
DEFAULT_AUTOSAVE_DELAY = 5.0
LOG_FORMAT = "[%(levelname)s] %(message)s"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class Settings:
    database_url: str | None = None
    sqlite_path: Path | None = None
    autosave_delay: float = DEFAULT_AUTOSAVE_DELAY
    sql_echo: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        dotenv_path: Path | None = DOTENV_PATH,
    ) -> Settings:
        """Read settings from ``environ`` (``os.environ`` after loading ``.env``)."""
        if environ is None:
            if dotenv_path is not None and dotenv_path.exists():
                load_dotenv(dotenv_path, override=False)
            environ = os.environ

        sqlite_path = environ.get("SQLITE_PATH") or None
        delay_raw = environ.get("AUTOSAVE_DELAY_SECONDS")
        try:
            autosave_delay = float(delay_raw) if delay_raw else DEFAULT_AUTOSAVE_DELAY
        except ValueError:
            raise ValueError(f"AUTOSAVE_DELAY_SECONDS must be a number, got {delay_raw!r}.") from None
        if autosave_delay < 0:
            raise ValueError("AUTOSAVE_DELAY_SECONDS must be non-negative.")

        return cls(
            database_url=environ.get("DATABASE_URL") or None,
            sqlite_path=Path(sqlite_path) if sqlite_path else None,
            autosave_delay=autosave_delay,
            sql_echo=(environ.get("SQL_ECHO") or "").strip().lower() in _TRUTHY,
            log_level=(environ.get("LOG_LEVEL") or "INFO").strip().upper(),
        )


def configure_logging(level: str | int = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["DEFAULT_AUTOSAVE_DELAY", "LOG_FORMAT", "Settings", "configure_logging"]
