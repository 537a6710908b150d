# app/utils/filters.py
"""
Translate the JSON query filter accepted by list endpoints into SQLAlchemy
criteria.

    {"where": {"code": "IDR", "createdAt": {"gt": "2024-01-01T00:00:00"}},
     "fields": {"name": true}, "order": "name ASC", "limit": 10, "skip": 20}

`where` keys are camelCase field names; `and` / `or` take lists of nested
clauses.
"""
import uuid
from datetime import datetime

from fastapi import HTTPException
from sqlalchemy import DateTime, JSON, Uuid, and_, asc, desc, not_, or_

from app.models.mixins import to_snake

OPERATORS = (
    "eq", "neq", "gt", "gte", "lt", "lte",
    "inq", "nin", "between", "like", "nlike", "ilike", "nilike",
)


def _bad_request(message):
    return HTTPException(status_code=400, detail=message)


def resolve_column(model, field: str):
    name = to_snake(field)
    if name not in model.column_names() or name in model.__hidden__:
        raise _bad_request(f"Unknown field '{field}'")
    column = model.__table__.columns[name]
    if isinstance(column.type, JSON):
        raise _bad_request(f"Field '{field}' cannot be used in a filter")
    return column


def coerce_value(column, value):
    if value is None:
        return None
    if isinstance(value, list):
        return [coerce_value(column, item) for item in value]
    try:
        if isinstance(column.type, Uuid):
            return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
        if isinstance(column.type, DateTime) and isinstance(value, str):
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
            # stored timestamps are naive UTC
            return parsed.replace(tzinfo=None) if parsed.tzinfo else parsed
    except ValueError:
        raise _bad_request(f"Invalid value for '{column.key}': {value!r}")
    return value


def _operator_clause(column, op, value):
    value = coerce_value(column, value)
    if op == "eq":
        return column.is_(None) if value is None else column == value
    if op == "neq":
        return column.isnot(None) if value is None else column != value
    if op == "gt":
        return column > value
    if op == "gte":
        return column >= value
    if op == "lt":
        return column < value
    if op == "lte":
        return column <= value
    if op in ("inq", "nin"):
        if not isinstance(value, list):
            raise _bad_request(f"'{op}' expects a list")
        return column.in_(value) if op == "inq" else column.not_in(value)
    if op == "between":
        if not isinstance(value, list) or len(value) != 2:
            raise _bad_request("'between' expects a list of two values")
        return column.between(value[0], value[1])
    if op == "like":
        return column.like(value)
    if op == "nlike":
        return not_(column.like(value))
    if op == "ilike":
        return column.ilike(value)
    if op == "nilike":
        return not_(column.ilike(value))
    raise _bad_request(f"Unsupported operator '{op}'")


def build_where(model, where):
    """Return one SQLAlchemy expression for a `where` object, or None if empty."""
    if not where:
        return None
    if not isinstance(where, dict):
        raise _bad_request("'where' must be an object")

    clauses = []
    for key, condition in where.items():
        if key in ("and", "or"):
            if not isinstance(condition, list):
                raise _bad_request(f"'{key}' expects a list of conditions")
            nested = [build_where(model, item) for item in condition]
            nested = [clause for clause in nested if clause is not None]
            if nested:
                clauses.append(and_(*nested) if key == "and" else or_(*nested))
            continue

        column = resolve_column(model, key)
        if isinstance(condition, dict):
            for op, value in condition.items():
                if op not in OPERATORS:
                    raise _bad_request(f"Unsupported operator '{op}'")
                clauses.append(_operator_clause(column, op, value))
        else:
            clauses.append(_operator_clause(column, "eq", condition))

    if not clauses:
        return None
    return clauses[0] if len(clauses) == 1 else and_(*clauses)


def mentions_field(where, field: str) -> bool:
    if not isinstance(where, dict):
        return False
    for key, condition in where.items():
        if key == field:
            return True
        if key in ("and", "or") and isinstance(condition, list):
            if any(mentions_field(item, field) for item in condition):
                return True
    return False


def build_order(model, order):
    if not order:
        return []
    if isinstance(order, str):
        order = [order]
    if not isinstance(order, list):
        raise _bad_request("'order' must be a string or a list of strings")

    criteria = []
    for entry in order:
        parts = str(entry).split()
        if not parts or len(parts) > 2:
            raise _bad_request(f"Invalid order clause '{entry}'")
        column = resolve_column(model, parts[0])
        direction = parts[1].upper() if len(parts) == 2 else "ASC"
        if direction not in ("ASC", "DESC"):
            raise _bad_request(f"Invalid order direction '{parts[1]}'")
        criteria.append(asc(column) if direction == "ASC" else desc(column))
    return criteria


def build_fields(model, fields):
    """Column names to serialize, or None for all of them."""
    if not fields:
        return None
    names = model.column_names()
    if isinstance(fields, list):
        selected = {to_snake(field) for field in fields}
    elif isinstance(fields, dict):
        included = {to_snake(k) for k, v in fields.items() if v}
        excluded = {to_snake(k) for k, v in fields.items() if not v}
        selected = included or set(names) - excluded
    else:
        raise _bad_request("'fields' must be an object or a list")
    unknown = selected - set(names)
    if unknown:
        raise _bad_request(f"Unknown field(s) {sorted(unknown)}")
    return selected


def parse_pagination(filter_: dict):
    limit = filter_.get("limit")
    skip = filter_.get("skip", filter_.get("offset"))
    for name, value in (("limit", limit), ("skip", skip)):
        if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 0):
            raise _bad_request(f"'{name}' must be a non-negative integer")
    return limit, skip
