"""
SQL fragment builders shared by the repositories.

Statements use `$n` positional placeholders; `app.core.database.execute`
binds them. Only column names are ever interpolated into SQL text, and those
always come from a fixed per-entity table (FieldMap / FilterField), never from
caller-supplied keys.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app.core.errors import InvalidInput

logger = logging.getLogger(__name__)

CONTAINS = "contains"
MIN = "min"
MAX = "max"
POSITIVE = "positive"


@dataclass(frozen=True)
class FieldMap:
    """
    Domain field name -> storage column name for one entity.

    Names without an entry in `columns` pass through unchanged, so
    `numEmployees` needs a mapping but `title` does not. When `allowed` is
    given it lists every field the entity accepts in an update.
    """

    columns: Mapping[str, str] = field(default_factory=dict)
    allowed: Optional[frozenset] = None

    def column_for(self, name: str) -> str:
        return self.columns.get(name, name)

    def check(self, name: str) -> None:
        if self.allowed is not None and name not in self.allowed:
            raise InvalidInput(f"Unknown field: {name}")


def sql_for_partial_update(data: Mapping[str, Any], field_map: FieldMap) -> Tuple[str, List[Any]]:
    """
    Build the SET clause for a partial update.

    Args:
        data: Fields to change, e.g. {"numEmployees": 10, "name": "New"}
        field_map: Column mapping for the entity

    Returns:
        (set_cols, values), e.g. ('"num_employees"=$1, "name"=$2', [10, "New"])

    Raises:
        InvalidInput: If data is empty or names a field the entity does not allow
    """
    if not data:
        raise InvalidInput("No data")

    cols = []
    values = []
    for idx, (name, value) in enumerate(data.items(), start=1):
        field_map.check(name)
        cols.append(f'"{field_map.column_for(name)}"=${idx}')
        values.append(value)

    return ", ".join(cols), values


@dataclass(frozen=True)
class FilterField:
    """One recognised filter: criteria key, column it constrains, predicate kind."""

    name: str
    column: str
    kind: str

    def predicate(self, value: Any, position: int) -> Tuple[Optional[str], Any]:
        if self.kind == CONTAINS:
            return f"LOWER({self.column}) LIKE LOWER(${position})", f"%{value}%"
        if self.kind == MIN:
            return f"{self.column} >= ${position}", value
        if self.kind == MAX:
            return f"{self.column} <= ${position}", value
        if self.kind == POSITIVE:
            # false imposes no constraint
            if not value:
                return None, None
            return f"{self.column} > ${position}", 0
        raise ValueError(f"Unknown filter kind: {self.kind}")


def build_filter_query(
    select_sql: str,
    fields: Iterable[FilterField],
    filters: Optional[Mapping[str, Any]],
    order_by: str,
) -> Tuple[str, List[Any]]:
    """
    Append a WHERE clause built from `filters` to `select_sql`.

    Predicates follow the order of `fields`, not the order of `filters`,
    and keys that are not in `fields` are ignored. Missing or None values
    impose nothing; with no active predicate the WHERE clause is omitted.

    Returns:
        (query, values)
    """
    filters = filters or {}
    where: List[str] = []
    values: List[Any] = []

    for f in fields:
        value = filters.get(f.name)
        if value is None or value == "":
            continue
        clause, bound = f.predicate(value, len(values) + 1)
        if clause is None:
            continue
        where.append(clause)
        values.append(bound)

    query = select_sql.strip()
    if where:
        query += " WHERE " + " AND ".join(where)
    query += f" ORDER BY {order_by}"

    logger.debug("Built filter query: %s %s", query, values)
    return query, values


def row_to_dict(row) -> Dict[str, Any]:
    return dict(row._mapping)
