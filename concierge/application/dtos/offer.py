"""DTOs for offers and the offers overview."""

from dataclasses import dataclass

from concierge.application.dtos.document import StoredDocument
from concierge.domain.enums import ActionPriority


@dataclass(frozen=True)
class OfferAction:
    """Next step for an offer (needed=False means nothing to do)."""

    needed: bool
    message: str | None
    priority: ActionPriority
    days_ago: int


@dataclass(frozen=True)
class OfferOverviewItem:
    offer: StoredDocument
    action: OfferAction


@dataclass(frozen=True)
class OfferStats:
    total: int
    pending: int
    booked: int
