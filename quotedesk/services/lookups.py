"""
Lookup entities - vendors, recipients, categories and item types
"""
from typing import List, Optional

from quotedesk.models.lookup import Category, ItemType, Recipient, Vendor
from quotedesk.repository import LookupRepository
from quotedesk.storage import Collection, CollectionStore


def vendors(store: CollectionStore) -> LookupRepository[Vendor]:
    return LookupRepository(store, Collection.VENDORS, Vendor)


def recipients(store: CollectionStore) -> LookupRepository[Recipient]:
    return LookupRepository(store, Collection.RECIPIENTS, Recipient)


def categories(store: CollectionStore) -> LookupRepository[Category]:
    return LookupRepository(store, Collection.CATEGORIES, Category)


def item_types(store: CollectionStore) -> LookupRepository[ItemType]:
    return LookupRepository(store, Collection.ITEM_TYPES, ItemType)


# Vendors

async def list_vendors(store: CollectionStore) -> List[Vendor]:
    return await vendors(store).all()


async def create_vendor(store: CollectionStore, name: str) -> Optional[Vendor]:
    return await vendors(store).get_or_create(name)


async def delete_vendor(store: CollectionStore, vendor_id: str) -> bool:
    return await vendors(store).remove(vendor_id)


# Recipients

async def list_recipients(store: CollectionStore) -> List[Recipient]:
    return await recipients(store).all()


async def create_recipient(store: CollectionStore, name: str) -> Optional[Recipient]:
    return await recipients(store).get_or_create(name)


async def delete_recipient(store: CollectionStore, recipient_id: str) -> bool:
    return await recipients(store).remove(recipient_id)


# Categories

async def list_categories(store: CollectionStore) -> List[Category]:
    return await categories(store).all()


async def create_category(store: CollectionStore, name: str) -> Optional[Category]:
    return await categories(store).get_or_create(name)


async def delete_category(store: CollectionStore, category_id: str) -> bool:
    return await categories(store).remove(category_id)


# Item types

async def list_item_types(store: CollectionStore) -> List[ItemType]:
    return await item_types(store).all()


async def create_item_type(store: CollectionStore, name: str) -> Optional[ItemType]:
    return await item_types(store).get_or_create(name)


async def delete_item_type(store: CollectionStore, item_type_id: str) -> bool:
    return await item_types(store).remove(item_type_id)
