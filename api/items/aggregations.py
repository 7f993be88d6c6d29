"""
Fixed dashboard statistics over the `items` table.

Each aggregation is: optional presence filter -> group by one field -> mean or
count -> sort. Rows come back as `{"_id": <group key>, <value_key>: <value>}`;
records missing the group field land in the `None` bucket.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from . import model

Reduction = Literal["avg", "count"]
SortOrder = Literal["value_desc", "key_asc"]


@dataclass(frozen=True)
class Aggregation:
    name: str
    group_by: str
    value_key: str
    reduction: Reduction
    field: str | None = None
    sort: SortOrder = "value_desc"

    def sql(self) -> str:
        group_col = model.column_for(self.group_by)
        if self.reduction == "avg":
            if self.field is None:
                raise ValueError(f"{self.name}: avg needs a field")
            value_col = model.column_for(self.field)
            value_expr = f"avg({value_col})"
            where = f"WHERE {value_col} IS NOT NULL"
        else:
            value_expr = "count(*)"
            where = ""

        if self.sort == "key_asc":
            order = '"_id" ASC NULLS FIRST'
        else:
            # Null keys sort lowest, as they would in a document store.
            order = f'"{self.value_key}" DESC, "_id" ASC NULLS FIRST'

        return (
            f'SELECT {group_col} AS "_id", {value_expr} AS "{self.value_key}"\n'
            f"FROM {model.TABLE}\n"
            + (f"{where}\n" if where else "")
            + f"GROUP BY {group_col}\n"
            f"ORDER BY {order}"
        )


AVG_INTENSITY_BY_REGION = Aggregation(
    name="avgIntensityByRegion",
    group_by="region",
    value_key="avgIntensity",
    reduction="avg",
    field="intensity",
)

COUNT_BY_TOPIC = Aggregation(
    name="countByTopic",
    group_by="topic",
    value_key="count",
    reduction="count",
)

AVG_LIKELIHOOD_BY_SECTOR = Aggregation(
    name="avgLikelihoodBySector",
    group_by="sector",
    value_key="avgLikelihood",
    reduction="avg",
    field="likelihood",
)

AVG_RELEVANCE_BY_YEAR = Aggregation(
    name="avgRelevanceByYear",
    group_by="end_year",
    value_key="avgRelevance",
    reduction="avg",
    field="relevance",
    sort="key_asc",
)

DASHBOARD_AGGREGATIONS: tuple[Aggregation, ...] = (
    AVG_INTENSITY_BY_REGION,
    COUNT_BY_TOPIC,
    AVG_LIKELIHOOD_BY_SECTOR,
    AVG_RELEVANCE_BY_YEAR,
)
