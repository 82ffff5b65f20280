from decimal import Decimal, InvalidOperation
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional


def normalize_equity(v: Any) -> Optional[str]:
    """
    Accept equity as a decimal string or a number and return it as a string.

    Floats go through str() so 0.1 becomes "0.1", not the binary expansion.
    """
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("equity must be a decimal number")
    text = v.strip() if isinstance(v, str) else str(v)
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError("equity must be a decimal number")
    if not amount.is_finite() or amount < 0 or amount > 1:
        raise ValueError("equity must be between 0 and 1")
    return text


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=1)
    equity: Optional[str] = Field(None, description="Decimal string between 0 and 1")
    company_handle: str = Field(..., min_length=1, max_length=25)

    @field_validator("equity", mode="before")
    @classmethod
    def validate_equity(cls, v: Any) -> Optional[str]:
        return normalize_equity(v)

    class Config:
        extra = "forbid"


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    id and company_handle are not accepted; a body carrying either is rejected.
    """
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=1)
    equity: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v

    @field_validator("equity", mode="before")
    @classmethod
    def validate_equity(cls, v: Any) -> Optional[str]:
        return normalize_equity(v)

    class Config:
        extra = "forbid"


class JobResponse(BaseModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str


class CompanyJobResponse(BaseModel):
    """Job as listed under its company (no company_handle)"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
