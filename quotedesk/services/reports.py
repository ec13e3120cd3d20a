"""
Item-type reports with a per-type drill-down.
Overview: quantity / amount / quotation count per item type for a date range.
Drill-down: every item of one type, plus the same rows grouped by project.
"""
import calendar
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from quotedesk.models.lookup import ItemType
from quotedesk.models.quotation import QuotationWithItems

ALL = "all"
NO_TYPE = "no_type"
NO_TYPE_NAME = "No Type"
UNKNOWN_TYPE_NAME = "Unknown"
PROJECT_LABEL_LENGTH = 20


def current_month_range(today: Optional[date] = None) -> Tuple[date, date]:
    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def filter_quotations(
    quotations: Iterable[QuotationWithItems],
    start_date: date,
    end_date: date,
    status: str = ALL,
) -> List[QuotationWithItems]:
    """Quotations dated within [start_date, end_date] with a matching status"""
    return [
        q for q in quotations
        if start_date <= q.date <= end_date and (status == ALL or q.status.value == status)
    ]


def type_name(type_id: str, item_types: Iterable[ItemType]) -> str:
    if type_id == ALL:
        return "All Types"
    if type_id == NO_TYPE:
        return NO_TYPE_NAME
    for item_type in item_types:
        if item_type.id == type_id:
            return item_type.name
    return UNKNOWN_TYPE_NAME


def _bucket(type_id: str, name: str) -> dict:
    return {
        "type_id": type_id,
        "type_name": name,
        "quantity": 0,
        "total_amount": 0.0,
        "quotation_count": 0,
    }


def _round_amounts(rows: List[dict]) -> List[dict]:
    for row in rows:
        row["total_amount"] = round(row["total_amount"], 2)
    return rows


def _buckets(
    quotations: Iterable[QuotationWithItems],
    item_types: Iterable[ItemType],
) -> List[dict]:
    """Unrounded buckets with any quantity or amount, largest amount first"""
    buckets: Dict[str, dict] = {t.id: _bucket(t.id, t.name) for t in item_types}
    buckets[NO_TYPE] = _bucket(NO_TYPE, NO_TYPE_NAME)

    # A quotation counts once per type, however many items of that type it has
    seen: set = set()
    for q in quotations:
        for item in q.quotation_items:
            type_id = item.type_id or NO_TYPE
            if type_id not in buckets:
                buckets[type_id] = _bucket(type_id, UNKNOWN_TYPE_NAME)

            bucket = buckets[type_id]
            bucket["quantity"] += item.quantity
            bucket["total_amount"] += item.total_price

            if (q.id, type_id) not in seen:
                seen.add((q.id, type_id))
                bucket["quotation_count"] += 1

    rows = [b for b in buckets.values() if b["quantity"] != 0 or b["total_amount"] != 0]
    rows.sort(key=lambda b: b["total_amount"], reverse=True)
    return rows


def item_type_report(
    quotations: Iterable[QuotationWithItems],
    item_types: Iterable[ItemType],
    start_date: date,
    end_date: date,
    status: str = ALL,
) -> dict:
    item_types = list(item_types)
    filtered = filter_quotations(quotations, start_date, end_date, status)
    rows = _buckets(filtered, item_types)
    # Grand total from the unrounded sums
    total_amount = round(sum(r["total_amount"] for r in rows), 2)

    return {
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "status": status,
        "quotation_count": len(filtered),
        "rows": _round_amounts(rows),
        "totals": {
            "quantity": sum(r["quantity"] for r in rows),
            "total_amount": total_amount,
            "quotation_count": sum(r["quotation_count"] for r in rows),
        },
    }


def _project_label(project_name: str) -> str:
    if len(project_name) > PROJECT_LABEL_LENGTH:
        return project_name[:PROJECT_LABEL_LENGTH] + "..."
    return project_name


def item_type_detail(
    quotations: Iterable[QuotationWithItems],
    item_types: Iterable[ItemType],
    start_date: date,
    end_date: date,
    type_id: str,
    status: str = ALL,
) -> dict:
    """Drill-down for one item type (NO_TYPE selects items without a type)"""
    item_types = list(item_types)
    filtered = filter_quotations(quotations, start_date, end_date, status)

    rows = []
    for q in filtered:
        for item in q.quotation_items:
            if (item.type_id or NO_TYPE) != type_id:
                continue
            rows.append({
                "quotation_id": q.id,
                "quotation_number": q.quotation_number,
                "project_name": q.project_name,
                "recipient": q.recipient,
                "date": q.date.isoformat(),
                "status": q.status.value,
                "item_name": item.name,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            })
    # ISO dates sort chronologically
    rows.sort(key=lambda r: r["date"], reverse=True)

    projects: Dict[str, dict] = {}
    for row in rows:
        project = projects.setdefault(row["quotation_id"], {
            "quotation_id": row["quotation_id"],
            "project_name": row["project_name"],
            "label": _project_label(row["project_name"]),
            "quantity": 0,
            "total_amount": 0.0,
        })
        project["quantity"] += row["quantity"]
        project["total_amount"] += row["total_price"]

    by_project = sorted(projects.values(), key=lambda p: p["total_amount"], reverse=True)
    for project in by_project:
        project["total_amount"] = round(project["total_amount"], 2)

    return {
        "type_id": type_id,
        "type_name": type_name(type_id, item_types),
        "start_date": start_date.isoformat(),
        "end_date": end_date.isoformat(),
        "status": status,
        "quotation_count": len(projects),
        "rows": rows,
        "by_project": by_project,
        "totals": {
            "quantity": sum(r["quantity"] for r in rows),
            "total_amount": round(sum(r["total_price"] for r in rows), 2),
        },
    }
