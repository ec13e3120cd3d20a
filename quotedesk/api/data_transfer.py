"""
Bulk data export / import endpoints
"""
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from quotedesk.config import Settings, get_settings
from quotedesk.models.bundle import ExportBundle, ImportResult
from quotedesk.services.transfer import INVALID_FORMAT, export_all_data, import_data
from quotedesk.storage import CollectionStore, get_store

router = APIRouter()


@router.get("/export", response_model=ExportBundle)
async def export_data(
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Every collection in one JSON document"""
    return await export_all_data(store, settings.EXPORT_VERSION)


@router.post("/import", response_model=ImportResult)
async def import_bundle(
    payload: Any = Body(...),
    store: CollectionStore = Depends(get_store),
):
    """Replace all data with a previously exported bundle"""
    result = await import_data(store, payload)
    if not result.success:
        status_code = 400 if result.message == INVALID_FORMAT else 500
        raise HTTPException(status_code=status_code, detail=result.message)
    return result
