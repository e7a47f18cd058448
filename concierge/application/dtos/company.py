"""DTOs for companies (tenants)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CompanyResult:
    """Company read-model."""

    id: str
    name: str
    active: bool = True
