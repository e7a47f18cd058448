"""Helpers for values stored either as plain strings or as {"en": ..., "ro": ...} maps."""

from typing import Any

DEFAULT_LANGUAGE = "ro"
FALLBACK_LANGUAGES = ("en", "ro")


def localized_text(value: Any, language: str = "en", fallback: str = "") -> str:
    """Return the text for language, falling back to en, ro, then any value.

    Strings are returned as-is; numbers are stringified; anything else
    (None, empty maps, lists) yields fallback.
    """
    if value is None:
        return fallback
    if isinstance(value, str):
        return value or fallback
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, dict):
        for key in (language, *FALLBACK_LANGUAGES):
            text = value.get(key)
            if isinstance(text, str) and text:
                return text
        for text in value.values():
            if isinstance(text, str) and text:
                return text
    return fallback


def contains_text(value: Any, needle: str, language: str = "en") -> bool:
    """Case-insensitive substring test against the localized text of value."""
    if not needle:
        return True
    return needle.lower() in localized_text(value, language).lower()
