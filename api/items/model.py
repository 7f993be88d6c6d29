"""
Item record model.

The `items` table has one column per field below. Field names double as API
keys and column names; only names listed here ever reach generated SQL.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ItemField:
    name: str
    sql_type: str
    default: Any = None

    @property
    def column(self) -> str:
        return self.name


TEXT = "text"
NUMBER = "double precision"

ITEM_FIELDS: tuple[ItemField, ...] = (
    ItemField("end_year", TEXT, default=""),
    ItemField("intensity", NUMBER),
    ItemField("sector", TEXT),
    ItemField("topic", TEXT),
    ItemField("insight", TEXT),
    ItemField("url", TEXT),
    ItemField("region", TEXT),
    ItemField("start_year", TEXT, default=""),
    ItemField("impact", TEXT, default=""),
    # Pre-formatted date text, stored verbatim.
    ItemField("added", TEXT),
    ItemField("published", TEXT),
    ItemField("country", TEXT),
    ItemField("relevance", NUMBER),
    ItemField("pestle", TEXT),
    ItemField("source", TEXT),
    ItemField("title", TEXT),
    ItemField("likelihood", NUMBER),
)

FIELDS_BY_NAME: dict[str, ItemField] = {f.name: f for f in ITEM_FIELDS}

TABLE = "items"

# Columns returned for every record read.
SELECT_COLUMNS = ", ".join(["id", *(f.column for f in ITEM_FIELDS), "created_at", "updated_at"])

CREATE_TABLE_SQL = (
    f"CREATE TABLE IF NOT EXISTS {TABLE} (\n"
    "  id uuid PRIMARY KEY DEFAULT gen_random_uuid(),\n"
    + "".join(f"  {f.column} {f.sql_type},\n" for f in ITEM_FIELDS)
    + "  created_at timestamptz NOT NULL DEFAULT now(),\n"
    "  updated_at timestamptz NOT NULL DEFAULT now()\n"
    ")"
)


def column_for(name: str) -> str:
    """
    Map an API field name to its column. Raises KeyError for unknown names.
    """
    return FIELDS_BY_NAME[name].column


def apply_defaults(values: dict[str, Any]) -> dict[str, Any]:
    """
    Fill in create-time defaults for fields the caller did not supply.
    """
    merged = dict(values)
    for f in ITEM_FIELDS:
        if f.default is not None and f.name not in merged:
            merged[f.name] = f.default
    return merged


def to_api(row: dict[str, Any]) -> dict[str, Any]:
    """
    Shape a stored row as an API record: `_id`, every field, timestamps.
    """
    record: dict[str, Any] = {"_id": str(row["id"])}
    for f in ITEM_FIELDS:
        record[f.name] = row.get(f.column)
    record["createdAt"] = row.get("created_at")
    record["updatedAt"] = row.get("updated_at")
    return record
