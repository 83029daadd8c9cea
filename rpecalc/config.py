from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional, cast

PersistTarget = Literal["sqlite", "memory"]

_PERSIST_TARGETS = ("sqlite", "memory")


def persist_target() -> PersistTarget:
    """Return the persistence target for the history slot.

    Anything other than "memory" falls back to SQLite so a typo never
    silently drops the user's history.
    """
    value = os.environ.get("PERSIST_TARGET", "sqlite").strip().lower()
    if value not in _PERSIST_TARGETS:
        value = "sqlite"
    return cast(PersistTarget, value)


def db_path() -> str:
    return os.environ.get("DB_PATH", "./rpe_calculator.db")


def history_slot() -> str:
    return os.environ.get("HISTORY_SLOT", "rpeHistory")


def estimation_mode() -> str:
    return os.environ.get("ESTIMATION_MODE", "ensemble").strip().lower()


def default_locale() -> str:
    return os.environ.get("DEFAULT_LOCALE", "en")


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO")


def log_file() -> Optional[str]:
    return os.environ.get("LOG_FILE") or None


@dataclass
class AppConfig:
    persist_target: PersistTarget
    db_path: str
    history_slot: str
    estimation_mode: str
    default_locale: str
    log_level: str
    log_file: Optional[str]


def app_config() -> AppConfig:
    """Snapshot of the environment-driven settings for one session."""
    return AppConfig(
        persist_target=persist_target(),
        db_path=db_path(),
        history_slot=history_slot(),
        estimation_mode=estimation_mode(),
        default_locale=default_locale(),
        log_level=log_level(),
        log_file=log_file(),
    )
