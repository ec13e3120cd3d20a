"""
Financial rules - line totals, discounts, currency normalization and profit
"""
from typing import Iterable, Optional

from quotedesk.models.exchange_rate import ExchangeRate
from quotedesk.models.quotation import (
    CurrencyType,
    DiscountType,
    QuotationItem,
    QuotationItemInput,
    QuotationStatus,
    QuotationWithItems,
)

APPROVED_STATUSES = {QuotationStatus.APPROVED, QuotationStatus.INVOICED}


def item_total(quantity: float, unit_price: float) -> float:
    return quantity * unit_price


def price_item(data: QuotationItemInput, quotation_id: str) -> QuotationItem:
    """Build a stored item; price and total_price always follow quantity x unit_price"""
    total = item_total(data.quantity, data.unit_price)
    return QuotationItem(
        quotation_id=quotation_id,
        name=data.name,
        description=data.description,
        quantity=data.quantity,
        type_id=data.type_id,
        category_id=data.category_id,
        unit_price=data.unit_price,
        price=total,
        total_price=total,
    )


def quotation_subtotal(items: Iterable[QuotationItem]) -> float:
    return sum(item.total_price for item in items)


def discount_amount(subtotal: float, discount: float, discount_type: DiscountType) -> float:
    """Discount in currency units; percentages are taken of the subtotal"""
    if discount_type == DiscountType.PERCENTAGE:
        return subtotal * discount / 100
    return discount


def net_total(quotation: QuotationWithItems) -> float:
    subtotal = quotation_subtotal(quotation.quotation_items)
    return subtotal - discount_amount(subtotal, quotation.discount, quotation.discount_type)


def effective_rate(latest: Optional[ExchangeRate]) -> float:
    """Rate used for conversion; 1 when no rate has been recorded yet"""
    return latest.rate if latest and latest.rate else 1.0


def to_local(
    amount: float,
    currency: CurrencyType,
    rate: float,
    local_currency: CurrencyType = CurrencyType.IQD,
) -> float:
    if currency == local_currency:
        return amount
    return amount * rate


def quotation_profit(
    quotation: QuotationWithItems,
    rate: float,
    local_currency: CurrencyType = CurrencyType.IQD,
) -> float:
    revenue = to_local(net_total(quotation), quotation.currency_type, rate, local_currency)
    cost = to_local(quotation.vendor_cost, quotation.vendor_currency_type, rate, local_currency)
    return revenue - cost


def total_profit(
    quotations: Iterable[QuotationWithItems],
    rate: float,
    local_currency: CurrencyType = CurrencyType.IQD,
) -> float:
    """Profit summed over invoiced quotations only"""
    return sum(
        quotation_profit(q, rate, local_currency)
        for q in quotations
        if q.status == QuotationStatus.INVOICED
    )


def approval_rate(quotations: Iterable[QuotationWithItems]) -> float:
    """Share of approved or invoiced quotations, in percent with one decimal"""
    quotations = list(quotations)
    if not quotations:
        return 0.0
    approved = sum(1 for q in quotations if q.status in APPROVED_STATUSES)
    return round(approved / len(quotations) * 100, 1)


def dashboard_stats(
    quotations: Iterable[QuotationWithItems],
    vendor_count: int,
    latest_rate: Optional[ExchangeRate],
    local_currency: CurrencyType = CurrencyType.IQD,
) -> dict:
    quotations = list(quotations)
    rate = effective_rate(latest_rate)
    return {
        "total_quotations": len(quotations),
        "active_vendors": vendor_count,
        "total_profit": round(total_profit(quotations, rate, local_currency), 2),
        "profit_currency": local_currency.value,
        "approval_rate": approval_rate(quotations),
        "exchange_rate": rate,
        "exchange_rate_date": latest_rate.date.isoformat() if latest_rate else None,
    }
