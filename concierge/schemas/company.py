"""Company API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from concierge.core.company_validation import COMPANY_ID_MAX_LENGTH


class CompanyCreateRequest(BaseModel):
    """Request body for creating a company under a chosen id."""

    id: str = Field(..., pattern=r"^[a-zA-Z0-9_-]+$", max_length=COMPANY_ID_MAX_LENGTH)
    name: str = Field(..., min_length=1, max_length=200)


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    active: bool = True
