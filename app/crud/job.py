"""
CRUD operations for Job.

Implements the Repository pattern over parameterized SQL: each function
takes the database session explicitly and issues a single statement.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute, is_foreign_key_violation
from app.core.errors import InvalidInput, NotFound
from app.core.sql import (
    CONTAINS,
    MIN,
    POSITIVE,
    FieldMap,
    FilterField,
    build_filter_query,
    row_to_dict,
    sql_for_partial_update,
)

logger = logging.getLogger(__name__)

JOB_COLUMNS = "id, title, salary, equity, company_handle"

# id and company_handle are fixed once a job exists
IMMUTABLE_FIELDS = ("id", "company_handle")

FIELD_MAP = FieldMap(allowed=frozenset({"title", "salary", "equity"}))

FILTER_FIELDS = (
    FilterField("title", "title", CONTAINS),
    FilterField("minSalary", "salary", MIN),
    FilterField("hasEquity", "equity", POSITIVE),
)


def format_equity(value: Any) -> Optional[str]:
    """
    Render a stored equity value as a decimal string.

    Postgres hands back Decimal; SQLite may hand back float or int.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float):
        value = Decimal(repr(value))
    return format(Decimal(value), "f")


def _to_job(row) -> Dict[str, Any]:
    job = row_to_dict(row)
    job["equity"] = format_equity(job["equity"])
    return job


def build_query(filters: Optional[Mapping[str, Any]] = None) -> Tuple[str, List[Any]]:
    """
    Build the job search query.

    Args:
        filters: Any of title (substring, case-insensitive), minSalary
            (inclusive), hasEquity (true keeps only jobs with equity > 0)

    Returns:
        (query, values)
    """
    return build_filter_query(
        f"SELECT {JOB_COLUMNS} FROM jobs",
        FILTER_FIELDS,
        filters,
        order_by="title",
    )


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        data: {title, salary, equity, company_handle}

    Returns:
        {id, title, salary, equity, company_handle}

    Raises:
        InvalidInput: If company_handle does not name an existing company,
            or a column constraint (salary, equity) rejects the data
    """
    try:
        rows = execute(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), data["company_handle"]],
        )
    except IntegrityError as e:
        if is_foreign_key_violation(e):
            raise InvalidInput(f"No company: {data['company_handle']}")
        raise InvalidInput(f"Invalid job data: {e.orig}")

    job = _to_job(rows[0])
    logger.info(f"Created job {job['id']}: {job['title']} ({job['company_handle']})")
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """Find jobs matching `filters`, ordered by title."""
    query, values = build_query(filters)
    return [_to_job(row) for row in execute(db, query, values)]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its ID.

    Raises:
        NotFound: If no job has this id
    """
    rows = execute(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not rows:
        raise NotFound(f"No job: {job_id}")
    return _to_job(rows[0])


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields present in `data` change.

    Args:
        data: Any of {title, salary, equity}

    Raises:
        InvalidInput: If data tries to change id or company_handle, is empty,
            names another field, or a column constraint rejects it
        NotFound: If no job has this id
    """
    if any(name in data for name in IMMUTABLE_FIELDS):
        raise InvalidInput("Cannot update id or company_handle of a job")

    set_cols, values = sql_for_partial_update(data, FIELD_MAP)
    id_idx = len(values) + 1

    try:
        rows = execute(
            db,
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*values, job_id],
        )
    except IntegrityError as e:
        raise InvalidInput(f"Invalid job data: {e.orig}")
    if not rows:
        raise NotFound(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {sorted(data)}")
    return _to_job(rows[0])


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFound: If no job has this id
    """
    rows = execute(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        raise NotFound(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
