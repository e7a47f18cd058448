"""Shared utilities: datetime, generators, sanitization, localization, numbers, roles."""

from concierge.shared.utils.datetime import (
    ensure_utc,
    from_timestamp_utc,
    iso_day,
    month_bounds,
    parse_datetime,
    parse_day,
    today_utc,
    utc_now,
)
from concierge.shared.utils.generators import generate_cuid, generate_embedded_id
from concierge.shared.utils.localization import contains_text, localized_text
from concierge.shared.utils.numbers import first_amount, first_number, to_float, to_int
from concierge.shared.utils.roles import ADMIN_ROLES, is_admin_role, normalize_role
from concierge.shared.utils.sanitization import clean_text, sanitize_document

__all__ = [
    "generate_cuid",
    "generate_embedded_id",
    "utc_now",
    "today_utc",
    "ensure_utc",
    "from_timestamp_utc",
    "parse_datetime",
    "parse_day",
    "iso_day",
    "month_bounds",
    "localized_text",
    "contains_text",
    "to_float",
    "to_int",
    "first_amount",
    "first_number",
    "ADMIN_ROLES",
    "normalize_role",
    "is_admin_role",
    "clean_text",
    "sanitize_document",
]
