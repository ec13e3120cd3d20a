"""
Quotations API endpoints
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from quotedesk.config import Settings, get_settings
from quotedesk.models.quotation import (
    Quotation,
    QuotationCreate,
    QuotationUpdate,
    QuotationWithItems,
)
from quotedesk.services import quotations as quotation_service
from quotedesk.services.app_settings import get_app_settings
from quotedesk.services.exports import quotation_pdf, quotations_workbook
from quotedesk.services.lookups import create_recipient, vendors
from quotedesk.storage import CollectionStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


async def _filtered(store, search: str, status: str, budget_type: str) -> List[QuotationWithItems]:
    quotations = await quotation_service.list_quotations_with_relations(store)
    return quotation_service.search_quotations(quotations, search, status, budget_type)


async def _check_vendor(store: CollectionStore, vendor_id: Optional[str]) -> None:
    if vendor_id and await vendors(store).get(vendor_id) is None:
        raise HTTPException(status_code=404, detail="Vendor not found")


@router.get("/", response_model=List[QuotationWithItems])
async def list_quotations(
    search: str = "",
    status: str = "all",
    budget_type: str = "all",
    store: CollectionStore = Depends(get_store),
):
    """List quotations with items, vendor and documents, newest first"""
    return await _filtered(store, search, status, budget_type)


@router.get("/next-number")
async def next_quotation_number(
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Preview the number the next quotation will get"""
    number = await quotation_service.generate_quotation_number(store, settings.QUOTATION_PREFIX)
    return {"quotation_number": number}


@router.get("/export")
async def export_quotations(
    search: str = "",
    status: str = "all",
    budget_type: str = "all",
    store: CollectionStore = Depends(get_store),
):
    """Spreadsheet of the (filtered) quotation list"""
    quotations = await _filtered(store, search, status, budget_type)
    if not quotations:
        raise HTTPException(status_code=404, detail="No quotations to export")

    filename = f"quotations_{date.today().isoformat()}.xlsx"
    return Response(
        content=quotations_workbook(quotations),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{quotation_id}", response_model=QuotationWithItems)
async def get_quotation(
    quotation_id: str,
    store: CollectionStore = Depends(get_store),
):
    """Get a single quotation with its relations"""
    quotation = await quotation_service.get_quotation(store, quotation_id)
    if not quotation:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return quotation


@router.get("/{quotation_id}/pdf")
async def get_quotation_pdf(
    quotation_id: str,
    store: CollectionStore = Depends(get_store),
):
    """Render a quotation as PDF"""
    quotation = await quotation_service.get_quotation(store, quotation_id)
    if not quotation:
        raise HTTPException(status_code=404, detail="Quotation not found")

    company = await get_app_settings(store)
    return Response(
        content=quotation_pdf(quotation, company),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{quotation.quotation_number}.pdf"'},
    )


@router.post("/", response_model=Quotation)
async def create_quotation(
    data: QuotationCreate,
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Create a quotation with items; the number is always assigned here"""
    await _check_vendor(store, data.vendor_id)

    if data.recipient.strip():
        await create_recipient(store, data.recipient)

    quotation = await quotation_service.create_quotation(store, data, settings.QUOTATION_PREFIX)
    if not quotation:
        raise HTTPException(status_code=500, detail="Failed to create quotation")
    return quotation


@router.put("/{quotation_id}", response_model=Quotation)
async def update_quotation(
    quotation_id: str,
    data: QuotationUpdate,
    store: CollectionStore = Depends(get_store),
):
    """Update a quotation; a submitted item list replaces all existing items"""
    patch = data.model_dump(exclude_unset=True, exclude={"items"})
    await _check_vendor(store, patch.get("vendor_id"))

    if await quotation_service.get_quotation(store, quotation_id) is None:
        raise HTTPException(status_code=404, detail="Quotation not found")

    quotation = await quotation_service.update_quotation(store, quotation_id, patch, data.items)
    if not quotation:
        raise HTTPException(status_code=500, detail="Failed to update quotation")
    return quotation


@router.delete("/{quotation_id}")
async def delete_quotation(
    quotation_id: str,
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """Delete a quotation together with its items and vendor documents"""
    deleted = await quotation_service.delete_quotation(store, quotation_id, settings.DOCUMENTS_DIR)
    if not deleted:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return {"message": "Quotation deleted"}
