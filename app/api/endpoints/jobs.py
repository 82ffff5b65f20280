import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_user, get_current_user
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeletedResponse,
    JobEnvelope,
    JobListResponse,
    JobUpdateRequest,
)
from app.schemas.user import CurrentUser

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Create a job posting.

    Authorization: logged in.
    """
    new_job = job_crud.create(db, request.model_dump())
    logger.info(f"{user.username} created job {new_job['id']}")
    return {"job": new_job}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = None,
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title.

    Args:
        title: Case-insensitive substring of the title
        minSalary: Only jobs paying at least this much
        hasEquity: true keeps only jobs offering equity > 0
    """
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    jobs = job_crud.find_all(db, {k: v for k, v in filters.items() if v is not None})
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Retrieve a job by ID."""
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: CurrentUser = Depends(get_admin_user),
):
    """
    Partially update a job: title, salary and/or equity.

    Authorization: admin.
    """
    job = job_crud.update(db, job_id, request.model_dump(exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Delete a job by ID.

    Authorization: logged in.
    """
    job_crud.remove(db, job_id)
    logger.info(f"{user.username} deleted job {job_id}")
    return {"deleted": job_id}
