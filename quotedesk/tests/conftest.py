"""
Test fixtures - in-memory collection store, temp directories + HTTP client
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from quotedesk.config import Settings, get_settings
from quotedesk.main import app
from quotedesk.storage import JsonFileStore, MemoryStore, get_store


@pytest_asyncio.fixture()
async def store():
    """Fresh in-memory store with every collection present and empty"""
    memory = MemoryStore()
    await memory.initialize()
    return memory


@pytest_asyncio.fixture()
async def file_store(tmp_path):
    """JSON file store rooted in a temp data directory"""
    json_store = JsonFileStore(tmp_path / "data")
    await json_store.initialize()
    return json_store


@pytest.fixture()
def test_settings(tmp_path):
    return Settings(
        STORAGE_BACKEND="memory",
        DATA_DIR=tmp_path / "data",
        DOCUMENTS_DIR=tmp_path / "documents",
        IMAGES_DIR=tmp_path / "images",
        MAX_DOCUMENT_SIZE=1024,
    )


@pytest.fixture()
def quotation_data():
    """Factory for a valid quotation payload (three items, subtotal 310)"""

    def make(**overrides):
        data = {
            "project_name": "Tower Upgrade",
            "date": "2024-06-10",
            "validity_date": "2024-07-10",
            "budget_type": "ma",
            "recipient": "Network Dept",
            "currency_type": "usd",
            "vendor_cost": 100,
            "vendor_currency_type": "usd",
            "discount": 10,
            "items": [
                {"name": "Antenna", "quantity": 2, "unit_price": 100},
                {"name": "Cable", "quantity": 1, "unit_price": 50},
                {"name": "Connector", "quantity": 3, "unit_price": 20},
            ],
        }
        data.update(overrides)
        return data

    return make


@pytest_asyncio.fixture()
async def client(store, test_settings):
    """httpx AsyncClient bound to the FastAPI app"""

    async def override_get_store():
        return store

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", follow_redirects=True) as ac:
        yield ac

    app.dependency_overrides.clear()
