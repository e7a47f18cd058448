"""Company ID format validation for the API.

Firestore document ids are opaque strings; we only accept the safe subset
generated by the console and by CUID (alphanumeric, hyphen, underscore).
"""

import re

COMPANY_ID_MAX_LENGTH = 128
_COMPANY_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(COMPANY_ID_MAX_LENGTH) + r"}$"
)


def is_valid_company_id_format(value: str) -> bool:
    """Return True if value is a safe company identifier (header validation)."""
    if not value or len(value) > COMPANY_ID_MAX_LENGTH:
        return False
    return bool(_COMPANY_ID_RE.fullmatch(value))
