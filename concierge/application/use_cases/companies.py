"""Company (tenant) registry: lookup and creation."""

from __future__ import annotations

from concierge.application.dtos.company import CompanyResult
from concierge.application.interfaces.repositories import ICompanyRepository
from concierge.domain.exceptions import CompanyNotFoundException, ValidationException
from concierge.shared.telemetry.logging import get_logger
from concierge.shared.utils.sanitization import clean_text

logger = get_logger(__name__)


class CompanyService:
    """Companies partition every other collection through companyId."""

    def __init__(self, company_repo: ICompanyRepository) -> None:
        self.company_repo = company_repo

    async def get_company(self, company_id: str) -> CompanyResult:
        company = await self.company_repo.get_by_id(company_id)
        if company is None:
            raise CompanyNotFoundException(company_id)
        return company

    async def list_companies(self) -> list[CompanyResult]:
        return await self.company_repo.list_all()

    async def create_company(self, company_id: str, name: str) -> CompanyResult:
        """Create a company under a caller-chosen id (format is checked at the API edge)."""
        clean_name = (clean_text(name) or "").strip()
        if not clean_name:
            raise ValidationException("Company name is required", field="name")
        company = await self.company_repo.create(company_id, clean_name)
        logger.info("Company created", extra={"company_id": company_id})
        return company
