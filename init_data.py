"""Initialize the data directory with empty collections"""
import asyncio

from quotedesk.config import get_settings
from quotedesk.storage import build_store


async def init():
    settings = get_settings()
    store = build_store(settings)
    await store.initialize()
    for directory in (settings.DOCUMENTS_DIR, settings.IMAGES_DIR):
        directory.mkdir(parents=True, exist_ok=True)
    print(f"Data files created in {settings.DATA_DIR}.")


if __name__ == "__main__":
    asyncio.run(init())
