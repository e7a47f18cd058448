"""Role helpers shared by access checks (roles arrive as free-form strings)."""

from typing import Any

ADMIN_ROLES = frozenset({"admin", "administrator", "owner", "manager", "superadmin"})


def normalize_role(role: Any) -> str:
    """Trim and lowercase a role; non-strings normalize to ''."""
    if not isinstance(role, str):
        return ""
    return role.strip().lower()


def is_admin_role(role: Any) -> bool:
    return normalize_role(role) in ADMIN_ROLES
