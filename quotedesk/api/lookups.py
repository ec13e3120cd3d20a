"""
Lookup API endpoints - vendors, recipients, categories, item types.
All four share the same list / create / delete shape.
"""
import logging
from typing import Awaitable, Callable, List, Optional, Type

from fastapi import APIRouter, Depends, HTTPException

from quotedesk.models.lookup import Category, ItemType, LookupCreate, LookupRecord, Recipient, Vendor
from quotedesk.services import lookups
from quotedesk.storage import CollectionStore, get_store

logger = logging.getLogger(__name__)


def lookup_router(
    label: str,
    model: Type[LookupRecord],
    list_fn: Callable[[CollectionStore], Awaitable[List[LookupRecord]]],
    create_fn: Callable[[CollectionStore, str], Awaitable[Optional[LookupRecord]]],
    delete_fn: Callable[[CollectionStore, str], Awaitable[bool]],
) -> APIRouter:
    router = APIRouter()

    @router.get("/", response_model=List[model])
    async def list_records(store: CollectionStore = Depends(get_store)):
        return await list_fn(store)

    @router.post("/", response_model=model)
    async def create_record(data: LookupCreate, store: CollectionStore = Depends(get_store)):
        """Returns the existing record when the name is already known (case-insensitive)"""
        record = await create_fn(store, data.name)
        if not record:
            raise HTTPException(status_code=500, detail=f"Failed to create {label.lower()}")
        return record

    @router.delete("/{record_id}")
    async def delete_record(record_id: str, store: CollectionStore = Depends(get_store)):
        if not await delete_fn(store, record_id):
            raise HTTPException(status_code=404, detail=f"{label} not found")
        return {"message": f"{label} deleted"}

    return router


vendors_router = lookup_router(
    "Vendor", Vendor, lookups.list_vendors, lookups.create_vendor, lookups.delete_vendor
)
recipients_router = lookup_router(
    "Recipient", Recipient, lookups.list_recipients, lookups.create_recipient, lookups.delete_recipient
)
categories_router = lookup_router(
    "Category", Category, lookups.list_categories, lookups.create_category, lookups.delete_category
)
item_types_router = lookup_router(
    "Item type", ItemType, lookups.list_item_types, lookups.create_item_type, lookups.delete_item_type
)
