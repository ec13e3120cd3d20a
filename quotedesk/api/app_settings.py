"""
Company settings API endpoints (address and logo)
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from quotedesk.config import Settings, get_settings
from quotedesk.models.app_settings import AppSettings, AppSettingsUpdate, LogoUpload
from quotedesk.services import app_settings as settings_service
from quotedesk.storage import CollectionStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=Optional[AppSettings])
async def get_app_settings(store: CollectionStore = Depends(get_store)):
    """The settings record, or null before anything was saved"""
    return await settings_service.get_app_settings(store)


@router.put("/", response_model=AppSettings)
async def update_app_settings(
    data: AppSettingsUpdate,
    store: CollectionStore = Depends(get_store),
):
    record = await settings_service.update_app_settings(store, data.model_dump(exclude_unset=True))
    if not record:
        raise HTTPException(status_code=500, detail="Failed to save settings")
    return record


@router.post("/logo", response_model=AppSettings)
async def upload_logo(
    data: LogoUpload,
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Store a base64 logo image and point the settings at it"""
    path = await settings_service.save_logo(data.data_url, data.filename, settings.IMAGES_DIR)
    if path is None:
        raise HTTPException(status_code=400, detail="Invalid image data")

    record = await settings_service.update_app_settings(store, {"logo_url": str(path)})
    if not record:
        raise HTTPException(status_code=500, detail="Failed to save settings")
    logger.info(f"Saved company logo to {path}")
    return record


@router.get("/logo")
async def get_logo(store: CollectionStore = Depends(get_store)):
    """The stored logo as a data URL"""
    record = await settings_service.get_app_settings(store)
    if not record or not record.logo_url:
        raise HTTPException(status_code=404, detail="Logo not found")

    data_url = await settings_service.load_logo(record.logo_url)
    if data_url is None:
        raise HTTPException(status_code=404, detail="Logo file not found")
    return {"data_url": data_url}
