"""Input sanitization for free text stored in documents and rendered by the UI."""

from typing import Any

import nh3

# Max nesting accepted for free-form document payloads (villa/boat/client extras).
MAX_DOCUMENT_DEPTH = 20


def clean_text(value: str | None) -> str | None:
    """Strip all HTML from a string with nh3; None and '' pass through unchanged."""
    if not value:
        return value
    return nh3.clean(value, tags=set(), attributes={})


def sanitize_document(data: Any, max_depth: int = MAX_DOCUMENT_DEPTH) -> Any:
    """Recursively clean string values in dicts and lists.

    Keys are left as-is; non-string scalars are returned unchanged.

    Raises:
        ValueError: If nesting exceeds max_depth.
    """
    if max_depth <= 0:
        raise ValueError("Maximum document nesting depth exceeded")
    if isinstance(data, str):
        return clean_text(data)
    if isinstance(data, dict):
        return {k: sanitize_document(v, max_depth - 1) for k, v in data.items()}
    if isinstance(data, list):
        return [sanitize_document(v, max_depth - 1) for v in data]
    return data
