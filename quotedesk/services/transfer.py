"""
Bulk export / import of every collection as one bundle
"""
import logging
from typing import Any

from quotedesk.models.base import utcnow
from quotedesk.models.bundle import ExportBundle, ImportResult
from quotedesk.storage import Collection, CollectionStore

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = [
    Collection.QUOTATIONS,
    Collection.QUOTATION_ITEMS,
    Collection.VENDORS,
    Collection.RECIPIENTS,
    Collection.CATEGORIES,
    Collection.ITEM_TYPES,
    Collection.EXCHANGE_RATES,
]
OPTIONAL_COLLECTIONS = [Collection.SETTINGS, Collection.VENDOR_DOCUMENTS]
INVALID_FORMAT = "Invalid data format"


async def export_all_data(store: CollectionStore, version: str = "1.0.0") -> ExportBundle:
    data = {c.key: await store.read(c) for c in Collection}
    return ExportBundle(**data, exported_at=utcnow(), version=version)


async def import_data(store: CollectionStore, payload: Any) -> ImportResult:
    """Replace every collection with the bundle's contents.

    Only the structure is checked (mandatory collections present as arrays);
    records are written as given. Nothing is written when the check fails.
    """
    if not isinstance(payload, dict):
        return ImportResult(success=False, message=INVALID_FORMAT)

    missing = [c.key for c in REQUIRED_COLLECTIONS if not isinstance(payload.get(c.key), list)]
    if missing:
        logger.warning(f"Rejected import, missing collections: {', '.join(missing)}")
        return ImportResult(success=False, message=INVALID_FORMAT)

    changes = {c: payload[c.key] for c in REQUIRED_COLLECTIONS}
    for c in OPTIONAL_COLLECTIONS:
        value = payload.get(c.key)
        changes[c] = value if isinstance(value, list) else []

    if not await store.write_many(changes):
        return ImportResult(success=False, message="Import failed: could not write data files")

    logger.info(
        f"Imported {len(changes[Collection.QUOTATIONS])} quotations "
        f"(bundle version {payload.get('version', 'unknown')})"
    )
    return ImportResult(success=True, message="Data imported successfully")
