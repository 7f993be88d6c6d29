"""
Item business logic.

Each operation runs its store call exactly once and turns any failure into an
HTTPException with a short, fixed message. The underlying error is logged.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import HTTPException, status
from pydantic import ValidationError

from . import model, repository, schemas
from .aggregations import DASHBOARD_AGGREGATIONS
from .filters import CHART_FILTER_KEYS, LIST_FILTER_KEYS, build_filter

logger = logging.getLogger(__name__)

# Response key -> record field. "swot" has no column and always comes back empty.
DISTINCT_FIELDS: dict[str, str] = {
    "countries": "country",
    "sectors": "sector",
    "topics": "topic",
    "pestles": "pestle",
    "regions": "region",
    "sources": "source",
    "swots": "swot",
    "end_years": "end_year",
    "start_years": "start_year",
}


async def list_items(params: dict[str, Any]) -> list[dict[str, Any]]:
    filters = build_filter(params, LIST_FILTER_KEYS)
    try:
        rows = await repository.find_items(filters)
    except Exception as exc:
        logger.exception("item_list_failed filters=%s", filters)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server Error") from exc
    return [model.to_api(row) for row in rows]


async def get_item(item_id: str) -> dict[str, Any]:
    try:
        row = await repository.get_item(item_id)
    except Exception as exc:
        logger.exception("item_get_failed item_id=%s", item_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch item",
        ) from exc
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")
    return model.to_api(row)


async def create_item(payload: dict[str, Any]) -> dict[str, Any]:
    try:
        parsed = schemas.ItemPayload.model_validate(payload)
    except ValidationError as exc:
        logger.info("item_create_rejected errors=%s", exc.errors())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to add item") from exc

    try:
        row = await repository.insert_item(model.apply_defaults(parsed.supplied()))
    except Exception as exc:
        logger.exception("item_create_failed")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to add item") from exc
    logger.info("item_created item_id=%s", row["id"])
    return model.to_api(row)


async def update_item(item_id: str, payload: dict[str, Any]) -> dict[str, Any] | None:
    """
    Merge the supplied fields into an existing item.

    An unknown id is not an error here: the result is None (JSON null), unlike
    get_item which answers 404.
    """
    try:
        values = schemas.ItemPayload.model_validate(payload).supplied()
    except ValidationError as exc:
        logger.info("item_update_rejected item_id=%s errors=%s", item_id, exc.errors())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to update item") from exc

    try:
        row = await repository.update_item(item_id, values)
    except Exception as exc:
        logger.exception("item_update_failed item_id=%s", item_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to update item") from exc
    if row is None:
        logger.warning("item_update_missing item_id=%s", item_id)
        return None
    return model.to_api(row)


async def delete_item(item_id: str) -> dict[str, str]:
    try:
        deleted = await repository.delete_item(item_id)
    except Exception as exc:
        logger.exception("item_delete_failed item_id=%s", item_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to delete item") from exc
    logger.info("item_deleted item_id=%s existed=%s", item_id, deleted)
    return {"message": "Item deleted"}


async def filter_options() -> dict[str, list[Any]]:
    """
    Distinct values per filterable field, for dropdowns.
    The per-field reads are independent, so they run concurrently.
    """
    try:
        results = await asyncio.gather(
            *(repository.distinct_values(field) for field in DISTINCT_FIELDS.values())
        )
    except Exception as exc:
        logger.exception("item_filter_options_failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load filters",
        ) from exc
    return dict(zip(DISTINCT_FIELDS.keys(), results))


async def chart_items(body: schemas.ChartFilterRequest | None) -> list[dict[str, Any]]:
    params = body.model_dump() if body is not None else {}
    filters = build_filter(params, CHART_FILTER_KEYS)
    try:
        rows = await repository.find_items(filters)
    except Exception as exc:
        logger.exception("item_chart_filter_failed filters=%s", filters)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to filter data",
        ) from exc
    return [model.to_api(row) for row in rows]


async def dashboard_stats() -> dict[str, list[dict[str, Any]]]:
    try:
        results = await asyncio.gather(
            *(repository.run_aggregation(agg) for agg in DASHBOARD_AGGREGATIONS)
        )
    except Exception as exc:
        logger.exception("item_stats_failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch statistics",
        ) from exc
    return {agg.name: rows for agg, rows in zip(DASHBOARD_AGGREGATIONS, results)}
