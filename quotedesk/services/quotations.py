"""
Quotation data access - relational assembly over the JSON collections
"""
import logging
import re
from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from quotedesk.models.lookup import Vendor
from quotedesk.models.quotation import (
    Quotation,
    QuotationCreate,
    QuotationItem,
    QuotationItemInput,
    QuotationWithItems,
)
from quotedesk.models.base import stamp
from quotedesk.models.vendor_document import VendorDocument
from quotedesk.repository import Repository
from quotedesk.services.documents import remove_document_file, remove_quotation_dir
from quotedesk.services.finance import price_item
from quotedesk.storage import Collection, CollectionStore

logger = logging.getLogger(__name__)

PROTECTED_FIELDS = {"id", "created_at", "updated_at", "quotation_number"}


def _quotations(store: CollectionStore) -> Repository[Quotation]:
    return Repository(store, Collection.QUOTATIONS, Quotation)


def _items(store: CollectionStore) -> Repository[QuotationItem]:
    return Repository(store, Collection.QUOTATION_ITEMS, QuotationItem)


def _documents(store: CollectionStore) -> Repository[VendorDocument]:
    return Repository(store, Collection.VENDOR_DOCUMENTS, VendorDocument)


# ─── Numbering ───

def next_quotation_number(numbers: Iterable[str], prefix: str, year: int) -> str:
    """PREFIX-YEAR-NNNN, one above the highest suffix already used this year"""
    year_prefix = f"{prefix}-{year}-"
    max_num = 0
    for number in numbers:
        if not number.startswith(year_prefix):
            continue
        match = re.match(r"\d+", number[len(year_prefix):])
        if match:
            max_num = max(max_num, int(match.group()))
    return f"{year_prefix}{max_num + 1:04d}"


def _used_numbers(repo: Repository[Quotation], quotations: List[Quotation]) -> List[str]:
    # Unparseable records still hold their number
    return [q.quotation_number for q in quotations] + repo.rejected_values("quotation_number")


async def generate_quotation_number(
    store: CollectionStore, prefix: str = "QT", year: Optional[int] = None
) -> str:
    repo = _quotations(store)
    quotations = await repo.all()
    return next_quotation_number(
        _used_numbers(repo, quotations), prefix, year or date.today().year
    )


# ─── Reads ───

def attach_relations(
    quotations: List[Quotation],
    items: List[QuotationItem],
    vendors: List[Vendor],
    documents: List[VendorDocument],
) -> List[QuotationWithItems]:
    items_by_quotation: Dict[str, List[QuotationItem]] = defaultdict(list)
    for item in items:
        items_by_quotation[item.quotation_id].append(item)

    docs_by_quotation: Dict[str, List[VendorDocument]] = defaultdict(list)
    for doc in documents:
        docs_by_quotation[doc.quotation_id].append(doc)

    vendors_by_id: Dict[str, Vendor] = {}
    for vendor in vendors:
        vendors_by_id.setdefault(vendor.id, vendor)

    return [
        QuotationWithItems(
            **q.model_dump(),
            quotation_items=items_by_quotation.get(q.id, []),
            vendor=vendors_by_id.get(q.vendor_id) if q.vendor_id else None,
            vendor_documents=docs_by_quotation.get(q.id, []),
        )
        for q in quotations
    ]


async def list_quotations_with_relations(store: CollectionStore) -> List[QuotationWithItems]:
    """Every quotation with its items, vendor and documents, in stored order"""
    quotations = await _quotations(store).all()
    items = await _items(store).all()
    vendors = await Repository(store, Collection.VENDORS, Vendor).all()
    documents = await _documents(store).all()
    return attach_relations(quotations, items, vendors, documents)


async def get_quotation(store: CollectionStore, quotation_id: str) -> Optional[QuotationWithItems]:
    for quotation in await list_quotations_with_relations(store):
        if quotation.id == quotation_id:
            return quotation
    return None


def search_quotations(
    quotations: Iterable[QuotationWithItems],
    search: str = "",
    status: str = "all",
    budget_type: str = "all",
) -> List[QuotationWithItems]:
    """List-screen filter, newest first"""
    needle = search.strip().lower()
    matches = []
    for q in quotations:
        if needle and needle not in q.project_name.lower() and needle not in q.quotation_number.lower():
            continue
        if status != "all" and q.status.value != status:
            continue
        if budget_type != "all" and q.budget_type.value != budget_type:
            continue
        matches.append(q)
    return sorted(matches, key=lambda q: q.created_at, reverse=True)


# ─── Writes ───

def _build_items(item_data: List[QuotationItemInput], quotation_id: str) -> List[QuotationItem]:
    return [stamp(price_item(data, quotation_id)) for data in item_data]


async def create_quotation(
    store: CollectionStore,
    data: QuotationCreate,
    prefix: str = "QT",
) -> Optional[Quotation]:
    """Create a quotation and its items in one write; None if the write failed"""
    quotations_repo = _quotations(store)
    items_repo = _items(store)
    quotations = await quotations_repo.all()
    items = await items_repo.all()

    number = next_quotation_number(
        _used_numbers(quotations_repo, quotations), prefix, date.today().year
    )
    quotation = stamp(Quotation(
        **data.model_dump(exclude={"items"}),
        quotation_number=number,
    ))
    new_items = _build_items(data.items, quotation.id)

    ok = await store.write_many({
        Collection.QUOTATIONS: quotations_repo.dump(quotations + [quotation]),
        Collection.QUOTATION_ITEMS: items_repo.dump(items + new_items),
    })
    if not ok:
        logger.error(f"Failed to create quotation {number}")
        return None

    logger.info(f"Created quotation {number} with {len(new_items)} items")
    return quotation


async def update_quotation(
    store: CollectionStore,
    quotation_id: str,
    patch: dict,
    items: Optional[List[QuotationItemInput]] = None,
) -> Optional[Quotation]:
    """Merge patch into the quotation.

    When items are given they replace every existing item of the quotation.
    Returns None when the quotation does not exist, the merged record is
    invalid or the write failed.
    """
    quotations_repo = _quotations(store)
    quotations = await quotations_repo.all()
    index = next((i for i, q in enumerate(quotations) if q.id == quotation_id), None)
    if index is None:
        return None

    current = quotations[index]
    changes = {k: v for k, v in patch.items() if k not in PROTECTED_FIELDS}
    try:
        updated = Quotation.model_validate({**current.model_dump(), **changes})
    except ValidationError as e:
        logger.warning(f"Rejected update of quotation {current.quotation_number}: {e.error_count()} error(s)")
        return None
    updated.touch()
    quotations[index] = updated

    writes = {Collection.QUOTATIONS: quotations_repo.dump(quotations)}
    if items is not None:
        items_repo = _items(store)
        kept = [i for i in await items_repo.all() if i.quotation_id != quotation_id]
        items_repo.drop_rejected("quotation_id", quotation_id)
        writes[Collection.QUOTATION_ITEMS] = items_repo.dump(kept + _build_items(items, quotation_id))

    if not await store.write_many(writes):
        logger.error(f"Failed to update quotation {current.quotation_number}")
        return None
    return updated


async def delete_quotation(
    store: CollectionStore,
    quotation_id: str,
    documents_dir: Optional[Path] = None,
) -> bool:
    """Remove a quotation with its items and vendor documents.

    Document files are deleted from disk once the records are gone.
    """
    quotations_repo = _quotations(store)
    items_repo = _items(store)
    documents_repo = _documents(store)

    quotations = await quotations_repo.all()
    remaining = [q for q in quotations if q.id != quotation_id]
    if len(remaining) == len(quotations):
        return False

    items = [i for i in await items_repo.all() if i.quotation_id != quotation_id]
    documents = await documents_repo.all()
    # Malformed records of this quotation go with it
    items_repo.drop_rejected("quotation_id", quotation_id)
    documents_repo.drop_rejected("quotation_id", quotation_id)
    orphaned = [d for d in documents if d.quotation_id == quotation_id]
    kept_documents = [d for d in documents if d.quotation_id != quotation_id]

    ok = await store.write_many({
        Collection.QUOTATIONS: quotations_repo.dump(remaining),
        Collection.QUOTATION_ITEMS: items_repo.dump(items),
        Collection.VENDOR_DOCUMENTS: documents_repo.dump(kept_documents),
    })
    if not ok:
        return False

    for doc in orphaned:
        await remove_document_file(doc.file_path)
    if documents_dir is not None:
        await remove_quotation_dir(documents_dir, quotation_id)

    logger.info(f"Deleted quotation {quotation_id} ({len(orphaned)} documents)")
    return True
