"""Display dictionaries and locale-aware date rendering.

Dictionaries are plain JSON files in `rpecalc/messages`, one per locale.
Lookups never fail for an unknown locale: they fall back to the default.
"""
from __future__ import annotations

import json
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from .config import default_locale
from .logger import logger

MESSAGES_DIR = Path(__file__).parent / "messages"

LOCALES: Dict[str, str] = {
    "en": "English",
    "pl": "Polski",
    "de": "Deutsch",
    "fr": "Français",
    "ja": "日本語",
}
DEFAULT_LOCALE = "en"


def resolve_locale(tag: Optional[str]) -> str:
    """Map a locale tag such as "de-DE" or "FR" to a supported locale."""
    fallback = default_locale()
    if fallback not in LOCALES:
        fallback = DEFAULT_LOCALE
    if not tag:
        return fallback
    base = str(tag).strip().replace("_", "-").split("-")[0].lower()
    if base in LOCALES:
        return base
    logger.debug(f"Unsupported locale {tag!r}; using {fallback}")
    return fallback


@lru_cache(maxsize=None)
def _load_messages(locale: str) -> Dict[str, Any]:
    path = MESSAGES_DIR / f"{locale}.json"
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


def get_dictionary(locale: Optional[str]) -> Dict[str, Any]:
    return _load_messages(resolve_locale(locale))


def format_date(value: str, locale: Optional[str]) -> str:
    """Render a stored ISO timestamp as a localized date.

    Values that do not parse (older entries stored already-formatted
    dates) are returned unchanged.
    """
    try:
        parsed = datetime.fromisoformat(value)
        pattern = get_dictionary(locale)["dateFormat"]
        return parsed.strftime(pattern)
    except (ValueError, TypeError, KeyError):
        return value
