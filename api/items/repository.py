"""
Item persistence.
This module is where item-related SQL lives.
"""

from __future__ import annotations

from typing import Any

from core import db

from . import model
from .aggregations import Aggregation


def _where_clause(filters: dict[str, str], *, start: int = 1) -> tuple[str, list[Any]]:
    """
    Render `{field: value}` as `WHERE col = $n AND ...`.

    Column names come from the record model, never from the caller.
    """
    if not filters:
        return "", []
    parts: list[str] = []
    args: list[Any] = []
    for i, (name, value) in enumerate(filters.items(), start=start):
        parts.append(f"{model.column_for(name)} = ${i}")
        args.append(value)
    return "WHERE " + " AND ".join(parts), args


async def ensure_schema() -> None:
    await db.execute(model.CREATE_TABLE_SQL)


async def find_items(filters: dict[str, str]) -> list[dict[str, Any]]:
    where, args = _where_clause(filters)
    return await db.fetch_all(
        f"""
        SELECT {model.SELECT_COLUMNS}
        FROM {model.TABLE}
        {where}
        ORDER BY created_at, id
        """,
        *args,
    )


async def get_item(item_id: str) -> dict[str, Any] | None:
    return await db.fetch_one(
        f"""
        SELECT {model.SELECT_COLUMNS}
        FROM {model.TABLE}
        WHERE id = $1::uuid
        """,
        item_id,
    )


async def insert_item(values: dict[str, Any]) -> dict[str, Any]:
    columns = [model.column_for(name) for name in values]
    if columns:
        placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
        sql = f"""
        INSERT INTO {model.TABLE} ({", ".join(columns)})
        VALUES ({placeholders})
        RETURNING {model.SELECT_COLUMNS}
        """
    else:
        sql = f"""
        INSERT INTO {model.TABLE} DEFAULT VALUES
        RETURNING {model.SELECT_COLUMNS}
        """
    row = await db.fetch_one(sql, *values.values())
    if row is None:
        raise RuntimeError("Insert returned no row.")
    return row


async def update_item(item_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
    """
    Overwrite only the supplied fields and bump `updated_at`.
    Returns the updated row, or None when the id does not exist.
    """
    assignments = [f"{model.column_for(name)} = ${i}" for i, name in enumerate(values, start=2)]
    assignments.append("updated_at = now()")
    return await db.fetch_one(
        f"""
        UPDATE {model.TABLE}
        SET {", ".join(assignments)}
        WHERE id = $1::uuid
        RETURNING {model.SELECT_COLUMNS}
        """,
        item_id,
        *values.values(),
    )


async def delete_item(item_id: str) -> bool:
    status = await db.execute(
        f"DELETE FROM {model.TABLE} WHERE id = $1::uuid",
        item_id,
    )
    return status.endswith(" 1")


async def distinct_values(field: str) -> list[Any]:
    """
    Sorted non-null distinct values of one field.
    Names without a backing column yield an empty list.
    """
    if field not in model.FIELDS_BY_NAME:
        return []
    col = model.column_for(field)
    return await db.fetch_values(
        f"""
        SELECT DISTINCT {col}
        FROM {model.TABLE}
        WHERE {col} IS NOT NULL
        ORDER BY {col}
        """
    )


async def run_aggregation(aggregation: Aggregation) -> list[dict[str, Any]]:
    return await db.fetch_all(aggregation.sql())
