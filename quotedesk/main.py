"""
Main FastAPI application
"""
import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quotedesk.config import get_settings
from quotedesk.storage import get_store
from quotedesk.utils.logger import get_logger, setup_logging
from quotedesk.api import app_settings, dashboard, data_transfer, documents, exchange_rates
from quotedesk.api import lookups, quotations, reports

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.DEBUG)

    store = await get_store()
    await store.initialize()
    for directory in (settings.DOCUMENTS_DIR, settings.IMAGES_DIR):
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
    logger.info(f"Data directory ready ({settings.STORAGE_BACKEND} store at {settings.DATA_DIR})")

    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(quotations.router, prefix="/api/quotations", tags=["Quotations"])
app.include_router(lookups.vendors_router, prefix="/api/vendors", tags=["Vendors"])
app.include_router(lookups.recipients_router, prefix="/api/recipients", tags=["Recipients"])
app.include_router(lookups.categories_router, prefix="/api/categories", tags=["Categories"])
app.include_router(lookups.item_types_router, prefix="/api/item-types", tags=["Item Types"])
app.include_router(exchange_rates.router, prefix="/api/exchange-rates", tags=["Exchange Rates"])
app.include_router(app_settings.router, prefix="/api/settings", tags=["Settings"])
app.include_router(documents.router, prefix="/api/documents", tags=["Documents"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(data_transfer.router, prefix="/api/data", tags=["Data"])


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "quotedesk.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.DEBUG
    )
