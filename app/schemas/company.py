"""
Pydantic schemas for Company API requests/responses.

The API speaks camelCase (numEmployees, logoUrl); the aliases below keep
the Python attribute names snake_case.
"""

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from typing import List, Optional

from app.schemas.job import CompanyJobResponse

HANDLE_PATTERN = r"^[a-z0-9][a-z0-9-]*$"
URL_PATTERN = r"^https?://\S+$"


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25, pattern=HANDLE_PATTERN)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl", pattern=URL_PATTERN)

    class Config:
        extra = "forbid"
        populate_by_name = True


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, alias="numEmployees", ge=0)
    logo_url: Optional[str] = Field(None, alias="logoUrl", pattern=URL_PATTERN)

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str], info: ValidationInfo) -> str:
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    class Config:
        extra = "forbid"
        populate_by_name = True


class CompanyResponse(BaseModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")

    class Config:
        populate_by_name = True


class CompanyDetailResponse(CompanyResponse):
    """
    Company with its jobs.

    `jobs` is left out of the body when the company has none.
    """
    jobs: Optional[List[CompanyJobResponse]] = None


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetailResponse


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeletedResponse(BaseModel):
    deleted: str
