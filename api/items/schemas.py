"""
Item API schemas (request bodies).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ItemPayload(BaseModel):
    """
    Write body for create/update. Every field is optional; unknown keys are
    dropped. Numbers sent for text fields are stored as text; numeric fields
    must be finite.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True, allow_inf_nan=False)

    end_year: str | None = None
    intensity: float | None = None
    sector: str | None = None
    topic: str | None = None
    insight: str | None = None
    url: str | None = None
    region: str | None = None
    start_year: str | None = None
    impact: str | None = None
    added: str | None = None
    published: str | None = None
    country: str | None = None
    relevance: float | None = None
    pestle: str | None = None
    source: str | None = None
    title: str | None = None
    likelihood: float | None = None

    def supplied(self) -> dict:
        """Fields present in the request body, explicit nulls included."""
        return self.model_dump(exclude_unset=True)


class ChartFilterRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    region: str | None = None
    sector: str | None = None
    topic: str | None = None
    end_year: str | None = None
    country: str | None = None
    pestle: str | None = None
    source: str | None = None
