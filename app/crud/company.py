"""
CRUD operations for Company.

Every function takes the database session explicitly and runs
parameterized SQL through app.core.database.execute.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import execute, is_unique_violation
from app.core.errors import Conflict, InvalidInput, NotFound
from app.core.sql import (
    CONTAINS,
    MAX,
    MIN,
    FieldMap,
    FilterField,
    build_filter_query,
    row_to_dict,
    sql_for_partial_update,
)
from app.crud.job import format_equity

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = 'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'

FIELD_MAP = FieldMap(
    columns={"numEmployees": "num_employees", "logoUrl": "logo_url"},
    allowed=frozenset({"name", "description", "numEmployees", "logoUrl"}),
)

FILTER_FIELDS = (
    FilterField("name", "name", CONTAINS),
    FilterField("minEmployees", "num_employees", MIN),
    FilterField("maxEmployees", "num_employees", MAX),
)


def build_query(filters: Optional[Mapping[str, Any]] = None) -> Tuple[str, List[Any]]:
    """
    Build the company search query.

    Args:
        filters: Any of name (substring, case-insensitive),
            minEmployees, maxEmployees (inclusive bounds)

    Returns:
        (query, values)

    Raises:
        InvalidInput: If minEmployees is greater than maxEmployees
    """
    filters = filters or {}
    min_employees = filters.get("minEmployees")
    max_employees = filters.get("maxEmployees")
    if min_employees is not None and max_employees is not None:
        if int(min_employees) > int(max_employees):
            raise InvalidInput("minEmployees cannot be greater than maxEmployees")

    return build_filter_query(
        f"SELECT {COMPANY_COLUMNS} FROM companies",
        FILTER_FIELDS,
        filters,
        order_by="name",
    )


def _integrity_error(e: IntegrityError, data: Mapping[str, Any]) -> Exception:
    # handle is pre-checked, so a unique failure here is the name (or a racing create)
    if is_unique_violation(e):
        return Conflict(f"Duplicate company: {data.get('name', data.get('handle'))}")
    return InvalidInput(f"Invalid company data: {e.orig}")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        {handle, name, description, numEmployees, logoUrl}

    Raises:
        Conflict: If the handle or the name is already taken
        InvalidInput: If a column constraint rejects the data
    """
    handle = data["handle"]
    duplicate = execute(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if duplicate:
        raise Conflict(f"Duplicate company: {handle}")

    try:
        rows = execute(
            db,
            f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
    except IntegrityError as e:
        raise _integrity_error(e, data)
    logger.info(f"Created company {handle}")
    return row_to_dict(rows[0])


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """Find companies matching `filters`, ordered by name."""
    query, values = build_query(filters)
    return [row_to_dict(row) for row in execute(db, query, values)]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company by handle, with its jobs.

    `jobs` ([{id, title, salary, equity}, ...]) is only attached when the
    company has at least one job.

    Raises:
        NotFound: If no company has this handle
    """
    rows = execute(db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFound(f"No company: {handle}")
    company = row_to_dict(rows[0])

    job_rows = execute(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    if job_rows:
        jobs = []
        for row in job_rows:
            job = row_to_dict(row)
            job["equity"] = format_equity(job["equity"])
            jobs.append(job)
        company["jobs"] = jobs

    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partial update: only the fields present in `data` change.

    Args:
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        InvalidInput: If data is empty, names another field, or a column
            constraint rejects it
        Conflict: If the new name belongs to another company
        NotFound: If no company has this handle
    """
    set_cols, values = sql_for_partial_update(data, FIELD_MAP)
    handle_idx = len(values) + 1

    try:
        rows = execute(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle],
        )
    except IntegrityError as e:
        raise _integrity_error(e, data)
    if not rows:
        raise NotFound(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {sorted(data)}")
    return row_to_dict(rows[0])


def remove(db: Session, handle: str) -> None:
    """
    Delete a company. Its jobs go with it (ON DELETE CASCADE).

    Raises:
        NotFound: If no company has this handle
    """
    rows = execute(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        raise NotFound(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
