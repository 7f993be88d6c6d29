"""
Item API endpoints, mounted under /api.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Query, status

from . import schemas, service

router = APIRouter()


@router.get("/items")
async def list_items(
    country: str | None = Query(default=None),
    sector: str | None = Query(default=None),
    topic: str | None = Query(default=None),
    pestle: str | None = Query(default=None),
    region: str | None = Query(default=None),
    start_year: str | None = Query(default=None),
    end_year: str | None = Query(default=None),
) -> list[dict]:
    return await service.list_items(
        {
            "country": country,
            "sector": sector,
            "topic": topic,
            "pestle": pestle,
            "region": region,
            "start_year": start_year,
            "end_year": end_year,
        }
    )


@router.get("/items/filters/all")
async def filter_options() -> dict:
    """
    Distinct values per field for the frontend's filter dropdowns.
    """
    return await service.filter_options()


@router.post("/items/filter")
async def filter_items(body: schemas.ChartFilterRequest | None = Body(default=None)) -> list[dict]:
    """
    Filtered records for chart views. Filters come from the JSON body.
    """
    return await service.chart_items(body)


@router.get("/items/stats/aggregate")
async def aggregate_stats() -> dict:
    return await service.dashboard_stats()


@router.get("/items/{item_id}")
async def get_item(item_id: str) -> dict:
    return await service.get_item(item_id)


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def create_item(payload: dict[str, Any] | None = Body(default=None)) -> dict:
    return await service.create_item(payload or {})


@router.put("/items/{item_id}")
async def update_item(item_id: str, payload: dict[str, Any] | None = Body(default=None)) -> dict | None:
    return await service.update_item(item_id, payload or {})


@router.delete("/items/{item_id}")
async def delete_item(item_id: str) -> dict:
    return await service.delete_item(item_id)
