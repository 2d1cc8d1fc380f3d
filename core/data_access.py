# core/data_access.py

from typing import Optional

from core.errors import DataAccessError, ErrorKind
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import BaseStrEnum


# =================================================================
#  TABLE-SCOPED SELECT / LOOKUP / INSERT / UPDATE / DELETE
# =================================================================
# Every helper raises DataAccessError carrying an ErrorKind.
# Callers branch on `err.kind`, never on message text.
# =================================================================


class MatchMode(BaseStrEnum):
    exact = "exact"
    case_insensitive = "case_insensitive"


def _client():
    client = get_supabase_client()
    if not client:
        raise DataAccessError(ErrorKind.unknown, "Supabase client not configured")
    return client


def _apply_filters(query, filters: Optional[dict]):
    for key, val in (filters or {}).items():
        if isinstance(val, (list, tuple, set)):
            query = query.in_(key, list(val))
        else:
            query = query.eq(key, val)
    return query


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def select_rows(
    table: str,
    filters: dict = None,
    *,
    columns: str = "*",
    order_by: Optional[str] = None,
    desc: bool = False,
    operation: Optional[str] = None,
) -> list:
    """SELECT with equality filters, optionally ordered."""
    operation = operation or f"Failed to fetch from {table}"

    try:
        query = _apply_filters(_client().table(table).select(columns), filters)
        if order_by:
            query = query.order(order_by, desc=desc)
        return query.execute().data or []

    except DataAccessError:
        raise
    except Exception as e:
        raise DataAccessError.from_exception(e, operation)


def _lookup(table, column, value, match, filters, columns, order_by, desc, operation):
    try:
        query = _client().table(table).select(columns)
        if match == MatchMode.case_insensitive:
            query = query.ilike(column, escape_like(value))
        else:
            query = query.eq(column, value)
        query = _apply_filters(query, filters)
        if order_by:
            query = query.order(order_by, desc=desc)
        return query.execute().data or []

    except DataAccessError:
        raise
    except Exception as e:
        raise DataAccessError.from_exception(e, operation)


def lookup_rows(
    table: str,
    column: str,
    value: str,
    *,
    match: MatchMode = MatchMode.case_insensitive,
    fallback: bool = True,
    filters: dict = None,
    columns: str = "*",
    order_by: Optional[str] = None,
    desc: bool = False,
    operation: Optional[str] = None,
) -> list:
    """
    Rows whose `column` equals `value` under the given match mode.

    A case-insensitive lookup rejected by a permission policy is retried
    once as an exact match when `fallback` is set. Case-insensitive
    results are re-checked in Python so only true matches come back.
    """
    operation = operation or f"Failed to look up {table}"
    value = value.strip()

    try:
        rows = _lookup(table, column, value, match, filters, columns, order_by, desc, operation)
    except DataAccessError as err:
        if not (
            fallback
            and match == MatchMode.case_insensitive
            and err.kind == ErrorKind.permission_denied
        ):
            raise
        logger.warning(f"Case-insensitive lookup on {table}.{column} denied, retrying exact match")
        return _lookup(table, column, value, MatchMode.exact, filters, columns, order_by, desc, operation)

    if match == MatchMode.case_insensitive:
        target = value.casefold()
        rows = [r for r in rows if str(r.get(column) or "").strip().casefold() == target]
    return rows


def lookup_one(table: str, column: str, value: str, **kwargs) -> Optional[dict]:
    """First row from lookup_rows, or None."""
    rows = lookup_rows(table, column, value, **kwargs)
    return rows[0] if rows else None


def insert_rows(table: str, rows: list, *, operation: Optional[str] = None) -> list:
    """Single or batch INSERT; returns the inserted rows."""
    operation = operation or f"Failed to insert into {table}"

    try:
        result = (
            _client().table(table)
            .insert(rows, returning="representation")
            .execute()
        )
        return result.data or []

    except DataAccessError:
        raise
    except Exception as e:
        raise DataAccessError.from_exception(e, operation)


def update_rows(table: str, filters: dict, data: dict, *, operation: Optional[str] = None) -> list:
    """UPDATE rows matching equality filters; returns the updated rows."""
    operation = operation or f"Failed to update {table}"

    try:
        query = _client().table(table).update(data, returning="representation")
        return _apply_filters(query, filters).execute().data or []

    except DataAccessError:
        raise
    except Exception as e:
        raise DataAccessError.from_exception(e, operation)


def delete_rows(table: str, filters: dict, *, operation: Optional[str] = None) -> list:
    """DELETE rows matching equality filters; returns the deleted rows."""
    if not filters:
        raise ValueError("delete_rows requires at least one filter")
    operation = operation or f"Failed to delete from {table}"

    try:
        query = _client().table(table).delete(returning="representation")
        return _apply_filters(query, filters).execute().data or []

    except DataAccessError:
        raise
    except Exception as e:
        raise DataAccessError.from_exception(e, operation)
