# utils/table_client.py
"""
Generic row CRUD against the hosted tabular store.

Every call takes a `bind` that is either an Engine (one transaction per call)
or an open Connection (caller owns the transaction). Filters are equality
predicates {column: value}; a None value matches NULL. Identifiers are
checked, values are always bound parameters.
"""
from __future__ import annotations

import re
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from domain.errors import ConstraintError, DataServiceError

logger = logging.getLogger(__name__)

Bind = Union[Engine, Connection]
Filters = Optional[Dict[str, Any]]

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _ident(name: str) -> str:
    if not isinstance(name, str) or not _IDENT_RE.match(name):
        raise ValueError(f"Invalid identifier: {name!r}")
    return name


def _where(filters: Filters) -> tuple[str, Dict[str, Any]]:
    if not filters:
        return "", {}
    clauses, params = [], {}
    for i, (col, val) in enumerate(filters.items()):
        if val is None:
            clauses.append(f"{_ident(col)} IS NULL")
        else:
            key = f"w_{i}"
            clauses.append(f"{_ident(col)} = :{key}")
            params[key] = val
    return " WHERE " + " AND ".join(clauses), params


@contextmanager
def _begin(bind: Bind, action: str, table: str) -> Iterator[Connection]:
    """Yield a connection in a transaction; translate driver errors."""
    try:
        if isinstance(bind, Connection):
            yield bind
        else:
            with bind.begin() as conn:
                yield conn
    except IntegrityError as e:
        logger.exception("%s on %s violated a constraint", action, table)
        raise ConstraintError(f"{action} on {table} rejected: {e.orig}") from e
    except SQLAlchemyError as e:
        logger.exception("%s on %s failed", action, table)
        raise DataServiceError(f"{action} on {table} failed: {e}") from e


# ─────────────────────────────────────────────────────────────
# Reads
# ─────────────────────────────────────────────────────────────

def select_rows(
    bind: Bind,
    table: str,
    *,
    columns: Optional[Sequence[str]] = None,
    filters: Filters = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    cols = ", ".join(_ident(c) for c in columns) if columns else "*"
    where, params = _where(filters)
    sql = f"SELECT {cols} FROM {_ident(table)}{where}"
    if order_by:
        sql += f" ORDER BY {_ident(order_by)} {'DESC' if descending else 'ASC'}"
    if limit is not None:
        sql += " LIMIT :limit"
        params["limit"] = int(limit)
    with _begin(bind, "select", table) as conn:
        rows = conn.execute(text(sql), params).mappings().all()
    return [dict(r) for r in rows]


def select_one(bind: Bind, table: str, filters: Filters) -> Optional[Dict[str, Any]]:
    rows = select_rows(bind, table, filters=filters, limit=1)
    return rows[0] if rows else None


def count_rows(bind: Bind, table: str, filters: Filters = None) -> int:
    where, params = _where(filters)
    with _begin(bind, "count", table) as conn:
        n = conn.execute(text(f"SELECT COUNT(*) FROM {_ident(table)}{where}"), params).scalar()
    return int(n or 0)


def max_value(bind: Bind, table: str, column: str) -> Optional[Any]:
    with _begin(bind, "max", table) as conn:
        return conn.execute(text(f"SELECT MAX({_ident(column)}) FROM {_ident(table)}")).scalar()


# ─────────────────────────────────────────────────────────────
# Writes
# ─────────────────────────────────────────────────────────────

def insert_row(bind: Bind, table: str, values: Dict[str, Any]) -> Dict[str, Any]:
    if not values:
        raise ValueError("insert_row needs at least one column")
    cols = [_ident(c) for c in values]
    sql = f"INSERT INTO {_ident(table)} ({', '.join(cols)}) VALUES ({', '.join(':' + c for c in cols)})"
    with _begin(bind, "insert", table) as conn:
        conn.execute(text(sql), values)
    return dict(values)


def update_rows(bind: Bind, table: str, values: Dict[str, Any], filters: Filters) -> List[Dict[str, Any]]:
    """Apply `values` to rows matching `filters`; return those rows as stored after the write."""
    if not values:
        raise ValueError("update_rows needs at least one column")
    if not filters:
        raise ValueError("update_rows refuses to run without filters")
    sets = ", ".join(f"{_ident(c)} = :v_{c}" for c in values)
    where, params = _where(filters)
    params.update({f"v_{c}": v for c, v in values.items()})

    # re-select by the same predicate, with updated columns taking their new values
    after = {k: values.get(k, v) for k, v in filters.items()}
    with _begin(bind, "update", table) as conn:
        conn.execute(text(f"UPDATE {_ident(table)} SET {sets}{where}"), params)
        return select_rows(conn, table, filters=after)


def delete_rows(bind: Bind, table: str, filters: Filters) -> int:
    if not filters:
        raise ValueError("delete_rows refuses to run without filters")
    where, params = _where(filters)
    with _begin(bind, "delete", table) as conn:
        result = conn.execute(text(f"DELETE FROM {_ident(table)}{where}"), params)
    return int(result.rowcount or 0)
