"""
Company endpoints.

Reads are public; creating and deleting need a logged-in caller, updating
needs an admin.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_current_user
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDeletedResponse,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
)
from app.schemas.user import CurrentUser

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """Create a company. 409 if the handle is taken."""
    company = company_crud.create(db, request.model_dump(by_alias=True))
    logger.info(f"{user.username} created company {company['handle']}")
    return {"company": company}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = None,
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name.

    400 if minEmployees is greater than maxEmployees.
    """
    filters = {"name": name, "minEmployees": min_employees, "maxEmployees": max_employees}
    companies = company_crud.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return {"companies": companies}


@router.get(
    "/{handle}",
    response_model=CompanyDetailEnvelope,
    response_model_exclude_unset=True,
)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and, when it has any, its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    company = company_crud.update(db, handle, request.model_dump(by_alias=True, exclude_unset=True))
    return {"company": company}


@router.delete("/{handle}", response_model=CompanyDeletedResponse)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    company_crud.remove(db, handle)
    logger.info(f"{user.username} deleted company {handle}")
    return {"deleted": handle}
