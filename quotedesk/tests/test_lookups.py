"""
Lookup entity tests - case-insensitive, idempotent creation
"""
from quotedesk.repository import LookupRepository
from quotedesk.services import lookups
from quotedesk.storage import Collection


async def test_create_vendor_reuses_existing_name(store):
    first = await lookups.create_vendor(store, "Acme Telecom")
    second = await lookups.create_vendor(store, "  ACME telecom ")
    assert first.id == second.id
    assert second.name == "Acme Telecom"
    assert len(await lookups.list_vendors(store)) == 1


async def test_create_strips_name(store):
    category = await lookups.create_category(store, "  Network  ")
    assert category.name == "Network"


async def test_lookup_kinds_are_independent(store):
    vendor = await lookups.create_vendor(store, "Shared")
    recipient = await lookups.create_recipient(store, "Shared")
    item_type = await lookups.create_item_type(store, "Shared")
    assert len({vendor.id, recipient.id, item_type.id}) == 3
    assert len(await lookups.list_recipients(store)) == 1
    assert len(await lookups.list_item_types(store)) == 1


async def test_existing_duplicates_resolve_to_first(store):
    await store.write(Collection.VENDORS, [
        {"id": "v1", "name": "Acme"},
        {"id": "v2", "name": "ACME"},
    ])
    vendor = await lookups.create_vendor(store, "acme")
    assert vendor.id == "v1"
    assert len(await lookups.list_vendors(store)) == 2


async def test_delete_lookup(store):
    category = await lookups.create_category(store, "Power")
    assert await lookups.delete_category(store, category.id) is True
    assert await lookups.delete_category(store, category.id) is False
    assert await lookups.list_categories(store) == []


def test_name_key():
    assert LookupRepository.name_key("  Mixed Case ") == "mixed case"
