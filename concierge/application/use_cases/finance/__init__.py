"""Finance use cases."""

from concierge.application.use_cases.finance.finance_operations import FinanceService

__all__ = ["FinanceService"]
