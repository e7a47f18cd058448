"""Caller identity resolved from gateway headers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Caller:
    """User acting on behalf of a company.

    user_id and email may be None for service-to-service calls; is_admin is
    derived from the role header (see shared.utils.roles).
    """

    company_id: str
    user_id: str | None = None
    email: str | None = None
    role: str | None = None
    is_admin: bool = False

    @property
    def actor(self) -> str | None:
        """Value written to createdBy / updatedBy fields."""
        return self.user_id or self.email
