"""DTOs for maintenance sweeps (orphaned offers, photo paths, collaborator payouts)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class OrphanedOffer:
    id: str
    company_id: str | None
    client_id: str | None
    client_name: str
    status: str | None


@dataclass
class OrphanedOffersReport:
    """Offers with no client or a deleted client, grouped per company."""

    total_offers: int = 0
    orphaned: list[OrphanedOffer] = field(default_factory=list)
    # company id -> {"total": n, "orphaned": m}
    by_company: dict[str, dict[str, int]] = field(default_factory=dict)
    deleted: int = 0


@dataclass
class PhotoFixReport:
    villas_checked: int = 0
    photos_checked: int = 0
    photos_fixed: int = 0
    photos_removed: int = 0
    villas_updated: int = 0
    storage_files: int = 0
    updated_villa_ids: list[str] = field(default_factory=list)


@dataclass
class PayoutCleanupReport:
    """Collaborator payouts removed from categoryPayments / financeRecords."""

    found: int = 0
    deleted: int = 0
    collaborators_reset: int = 0
    record_ids: list[str] = field(default_factory=list)


@dataclass
class FinanceWipeReport:
    """Finance data removed for one company."""

    records_deleted: int = 0
    payments_deleted: int = 0
    expenses_deleted: int = 0
    collaborators_reset: int = 0
