"""Maintenance use cases."""

from concierge.application.use_cases.maintenance.reconciliation import ReconciliationService

__all__ = ["ReconciliationService"]
