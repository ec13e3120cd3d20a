"""
Report API endpoints - item-type overview, drill-down and spreadsheet export
"""
from datetime import date
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from quotedesk.config import Settings, get_settings
from quotedesk.services import reports as report_service
from quotedesk.services.exports import item_type_report_workbook
from quotedesk.services.lookups import list_item_types
from quotedesk.services.quotations import list_quotations_with_relations
from quotedesk.storage import CollectionStore, get_store

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _date_range(start_date: Optional[date], end_date: Optional[date]) -> Tuple[date, date]:
    """Defaults to the current calendar month"""
    month_start, month_end = report_service.current_month_range()
    start_date = start_date or month_start
    end_date = end_date or month_end
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")
    return start_date, end_date


async def _overview(store, start_date, end_date, status) -> dict:
    start, end = _date_range(start_date, end_date)
    quotations = await list_quotations_with_relations(store)
    item_types = await list_item_types(store)
    return report_service.item_type_report(quotations, item_types, start, end, status)


@router.get("/item-types")
async def item_type_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = report_service.ALL,
    store: CollectionStore = Depends(get_store),
):
    """Quantity, amount and quotation count per item type"""
    return await _overview(store, start_date, end_date, status)


@router.get("/item-types/export")
async def export_item_type_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = report_service.ALL,
    store: CollectionStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    report = await _overview(store, start_date, end_date, status)
    filename = f"item_types_report_{report['start_date']}_{report['end_date']}.xlsx"
    return Response(
        content=item_type_report_workbook(report, settings.LOCAL_CURRENCY.upper()),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/item-types/{type_id}")
async def item_type_detail(
    type_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    status: str = report_service.ALL,
    store: CollectionStore = Depends(get_store),
):
    """Every item of one type (or "no_type") with a per-project breakdown"""
    start, end = _date_range(start_date, end_date)
    quotations = await list_quotations_with_relations(store)
    item_types = await list_item_types(store)
    return report_service.item_type_detail(quotations, item_types, start, end, type_id, status)
