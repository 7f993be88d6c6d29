"""Items API against a real Postgres server.

Uses TEST_DATABASE_URL when set, otherwise starts a throwaway container.
"""
import os
from collections.abc import AsyncGenerator, Iterator

import asyncpg
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from testcontainers.postgres import PostgresContainer

from core import db
from items import model, repository
from main import app
from tests.conftest import SEED_RECORDS


@pytest.fixture(scope="session")
def postgres_url() -> Iterator[str]:
    url = os.environ.get("TEST_DATABASE_URL", "").strip()
    if url:
        yield url
        return

    container = PostgresContainer("postgres:16-alpine", driver=None)
    try:
        container.start()
    except Exception as exc:
        pytest.skip(f"no Postgres available: {exc}")
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest_asyncio.fixture
async def pg_client(postgres_url: str, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client backed by the real repository and an empty items table"""
    monkeypatch.setenv("DATABASE_URL", postgres_url)
    await db.init_pool()
    try:
        await repository.ensure_schema()
        await db.execute(f"TRUNCATE {model.TABLE}")
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        await db.close_pool()


@pytest_asyncio.fixture
async def pg_seeded(pg_client: AsyncClient) -> list[dict]:
    created = []
    for record in SEED_RECORDS:
        response = await pg_client.post("/api/items", json=record)
        assert response.status_code == 201
        created.append(response.json())
    return created


class TestStatsSql:
    @pytest.mark.asyncio
    async def test_average_intensity_example(self, pg_client: AsyncClient):
        await pg_client.post("/api/items", json={"region": "Asia", "intensity": 3})
        await pg_client.post("/api/items", json={"region": "Asia", "intensity": 5})

        stats = (await pg_client.get("/api/items/stats/aggregate")).json()

        assert stats["avgIntensityByRegion"] == [{"_id": "Asia", "avgIntensity": 4}]

    @pytest.mark.asyncio
    async def test_all_four_aggregations(self, pg_client: AsyncClient, pg_seeded: list[dict]):
        response = await pg_client.get("/api/items/stats/aggregate")

        assert response.status_code == 200
        stats = response.json()
        assert stats["avgIntensityByRegion"] == [
            {"_id": None, "avgIntensity": 8},
            {"_id": "Asia", "avgIntensity": 4},
        ]
        assert stats["countByTopic"] == [
            {"_id": "oil", "count": 2},
            {"_id": "gas", "count": 1},
            {"_id": "market", "count": 1},
        ]
        assert stats["avgLikelihoodBySector"] == [
            {"_id": "Energy", "avgLikelihood": 3},
            {"_id": "Retail", "avgLikelihood": 3},
        ]
        assert stats["avgRelevanceByYear"] == [
            {"_id": "2018", "avgRelevance": 3},
            {"_id": "2020", "avgRelevance": 1},
        ]
        assert sum(row["count"] for row in stats["countByTopic"]) == len(pg_seeded)

    @pytest.mark.asyncio
    async def test_null_year_bucket_sorts_first(self, pg_client: AsyncClient, pg_seeded: list[dict]):
        await pg_client.post("/api/items", json={"end_year": None, "relevance": 2})

        stats = (await pg_client.get("/api/items/stats/aggregate")).json()

        assert stats["avgRelevanceByYear"] == [
            {"_id": None, "avgRelevance": 2},
            {"_id": "2018", "avgRelevance": 3},
            {"_id": "2020", "avgRelevance": 1},
        ]


class TestRecordsSql:
    @pytest.mark.asyncio
    async def test_list_filters(self, pg_client: AsyncClient, pg_seeded: list[dict]):
        everything = (await pg_client.get("/api/items")).json()
        narrowed = (await pg_client.get("/api/items", params={"region": "Asia", "country": "India", "sector": ""})).json()

        assert {item["_id"] for item in everything} == {item["_id"] for item in pg_seeded}
        assert [item["_id"] for item in narrowed] == [pg_seeded[0]["_id"]]

    @pytest.mark.asyncio
    async def test_update_merges_and_refreshes_timestamp(self, pg_client: AsyncClient):
        created = (await pg_client.post("/api/items", json={"region": "Asia", "topic": "oil", "intensity": 4})).json()

        updated = (await pg_client.put(f"/api/items/{created['_id']}", json={"topic": "gas"})).json()
        fetched = (await pg_client.get(f"/api/items/{created['_id']}")).json()

        assert fetched == updated
        assert updated["topic"] == "gas"
        assert updated["region"] == "Asia"
        assert updated["intensity"] == 4
        assert updated["end_year"] == ""
        assert updated["createdAt"] == created["createdAt"]
        assert updated["updatedAt"] > created["updatedAt"]

    @pytest.mark.asyncio
    async def test_distinct_values_have_no_duplicates(self, pg_client: AsyncClient, pg_seeded: list[dict]):
        options = (await pg_client.get("/api/items/filters/all")).json()

        assert options["countries"] == ["China", "France", "India"]
        assert options["topics"] == ["gas", "market", "oil"]
        assert options["end_years"] == ["", "2018", "2020"]
        assert options["swots"] == []

    @pytest.mark.asyncio
    async def test_delete_then_get_is_not_found(self, pg_client: AsyncClient, pg_seeded: list[dict]):
        item_id = pg_seeded[0]["_id"]

        assert await repository.delete_item(item_id) is True
        assert await repository.delete_item(item_id) is False
        assert (await pg_client.get(f"/api/items/{item_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_id_raises_from_store(self, pg_client: AsyncClient):
        with pytest.raises((asyncpg.exceptions.DataError, asyncpg.PostgresError)):
            await repository.get_item("not-a-uuid")

        response = await pg_client.get("/api/items/not-a-uuid")
        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch item"}
