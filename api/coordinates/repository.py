"""
Coordinate persistence.
This module is where coordinate-related SQL lives.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

import asyncpg

from core.errors import NotFoundError, QueryError

from .schemas import CoordinateRecord

SQL_DIR = Path(__file__).resolve().parent / "sql"

# Loaded once; the field list is resolved per call.
ADD_COORDINATE_TEMPLATE = (SQL_DIR / "add_coordinate.sql").read_text(encoding="utf-8")


def resolve_add_coordinate_sql() -> str:
    return ADD_COORDINATE_TEMPLATE.replace("$table_fields", CoordinateRecord.table_fields())


async def insert_coordinate(conn: Any, record: CoordinateRecord) -> CoordinateRecord:
    """
    Insert one record and return the row as read back from the database.

    The statement is resolved and prepared on every call; there is no cache
    across calls. That costs one extra round trip per insert. A caller that
    needs more throughput should keep prepared statements keyed by SQL text.

    No transaction is opened here, so each insert commits on its own.
    """
    sql = resolve_add_coordinate_sql()
    try:
        stmt = await conn.prepare(sql)
        rows = await stmt.fetch(record.value, record.axis)
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
        raise QueryError(f"Insert into coordinates failed: {exc}") from exc

    records = [CoordinateRecord.from_row(row) for row in rows]
    if not records:
        raise NotFoundError()
    return records[-1]
