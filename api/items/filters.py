"""
Equality filters built from optional request parameters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

# Query-string filters accepted by GET /api/items.
LIST_FILTER_KEYS: tuple[str, ...] = (
    "country",
    "sector",
    "topic",
    "pestle",
    "region",
    "start_year",
    "end_year",
)

# Body filters accepted by POST /api/items/filter (chart views).
CHART_FILTER_KEYS: tuple[str, ...] = (
    "region",
    "sector",
    "topic",
    "end_year",
    "country",
    "pestle",
    "source",
)


def build_filter(params: Mapping[str, Any], keys: Iterable[str]) -> dict[str, str]:
    """
    Keep only recognized keys whose value is a non-empty string.

    Missing, None and "" values are dropped rather than matched literally, so an
    empty result selects every record.
    """
    return {
        key: params[key]
        for key in keys
        if isinstance(params.get(key), str) and params[key] != ""
    }
