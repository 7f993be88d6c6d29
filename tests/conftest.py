from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from items import repository
from main import app
from tests.fakes import REPOSITORY_FUNCTIONS, FakeItemStore

SEED_RECORDS = [
    {"region": "Asia", "country": "India", "sector": "Energy", "topic": "oil", "intensity": 3,
     "likelihood": 2, "relevance": 1, "end_year": "2020", "pestle": "Economic", "source": "Reuters"},
    {"region": "Asia", "country": "China", "sector": "Energy", "topic": "gas", "intensity": 5,
     "likelihood": 4, "relevance": 3, "end_year": "2018", "pestle": "Political", "source": "EIA"},
    {"region": "Europe", "country": "France", "sector": "Retail", "topic": "oil", "intensity": None,
     "likelihood": 3, "relevance": None, "end_year": "2020", "pestle": "Economic", "source": "Reuters"},
    {"country": "India", "topic": "market", "intensity": 8, "pestle": "Social"},
]


@pytest.fixture
def store(monkeypatch) -> FakeItemStore:
    """Replace the item repository with an in-memory store"""
    fake = FakeItemStore()
    for name in REPOSITORY_FUNCTIONS:
        monkeypatch.setattr(repository, name, getattr(fake, name))
    return fake


@pytest_asyncio.fixture
async def client(store: FakeItemStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for API testing"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded(client: AsyncClient) -> list[dict]:
    """A small mixed dataset created through the API"""
    created = []
    for record in SEED_RECORDS:
        response = await client.post("/api/items", json=record)
        assert response.status_code == 201
        created.append(response.json())
    return created
