"""
Company settings and logo image handling
"""
import asyncio
import base64
import binascii
import logging
import os
import re
from pathlib import Path
from typing import Optional

from quotedesk.models.app_settings import AppSettings
from quotedesk.models.base import stamp
from quotedesk.repository import Repository
from quotedesk.storage import Collection, CollectionStore

logger = logging.getLogger(__name__)

DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")
IMAGE_MIME_TYPES = {"png": "image/png", "gif": "image/gif"}


def _repo(store: CollectionStore) -> Repository[AppSettings]:
    return Repository(store, Collection.SETTINGS, AppSettings)


async def get_app_settings(store: CollectionStore) -> Optional[AppSettings]:
    records = await _repo(store).all()
    return records[0] if records else None


async def update_app_settings(store: CollectionStore, patch: dict) -> Optional[AppSettings]:
    """Merge into the singleton, creating it on first use; None if the write failed"""
    repo = _repo(store)
    records = await repo.all()
    changes = {k: v for k, v in patch.items() if k in ("company_address", "logo_url")}

    if not records:
        record = stamp(AppSettings(
            company_address=changes.get("company_address") or None,
            logo_url=changes.get("logo_url") or None,
        ))
        records = [record]
    else:
        record = records[0].model_copy(update=changes)
        record.touch()
        records[0] = record

    if not await repo.save_all(records):
        return None
    return record


async def save_logo(data_url: str, filename: str, images_dir: Path) -> Optional[Path]:
    """Decode a base64 image (data URL or bare) into images_dir"""
    try:
        payload = base64.b64decode(DATA_URL_PREFIX.sub("", data_url), validate=True)
    except (binascii.Error, ValueError) as e:
        logger.error(f"Error decoding logo {filename}: {e}")
        return None

    dest = Path(images_dir) / os.path.basename(filename)

    def _write() -> None:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(payload)

    try:
        await asyncio.to_thread(_write)
    except OSError as e:
        logger.error(f"Error saving image: {e}")
        return None
    return dest


async def load_logo(file_path: str) -> Optional[str]:
    """Read an image file back as a data URL; None when missing or unreadable"""
    path = Path(file_path)
    try:
        content = await asyncio.to_thread(path.read_bytes)
    except OSError as e:
        logger.error(f"Error loading image {file_path}: {e}")
        return None

    ext = path.suffix.lower().lstrip(".")
    mime_type = IMAGE_MIME_TYPES.get(ext, "image/jpeg")
    return f"data:{mime_type};base64,{base64.b64encode(content).decode('ascii')}"
