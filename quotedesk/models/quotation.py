"""
Quotation and quotation item models
"""
import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from quotedesk.models.base import Record, coerce_date
from quotedesk.models.lookup import Vendor
from quotedesk.models.vendor_document import VendorDocument


class BudgetType(str, Enum):
    KOREK_COMMUNICATION = "korek_communication"
    MA = "ma"


class CurrencyType(str, Enum):
    USD = "usd"
    IQD = "iqd"


class QuotationStatus(str, Enum):
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    INVOICED = "invoiced"


class DiscountType(str, Enum):
    AMOUNT = "amount"          # flat value in the quotation currency
    PERCENTAGE = "percentage"  # percent of the subtotal


class Quotation(Record):
    """Price quotation header"""
    quotation_number: str
    project_name: str
    date: dt.date
    validity_date: dt.date
    budget_type: BudgetType
    recipient: str = ""
    currency_type: CurrencyType = CurrencyType.IQD
    vendor_id: Optional[str] = None
    vendor_cost: float = 0
    vendor_currency_type: CurrencyType = CurrencyType.IQD
    discount: float = 0
    discount_type: DiscountType = DiscountType.AMOUNT
    note: Optional[str] = None
    description: Optional[str] = None
    status: QuotationStatus = QuotationStatus.DRAFT

    @field_validator("date", "validity_date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        return coerce_date(v)


class QuotationItem(Record):
    """Line item in a quotation"""
    quotation_id: str
    name: str
    description: Optional[str] = None
    quantity: int = Field(default=0, ge=0)
    type_id: Optional[str] = None
    category_id: Optional[str] = None
    unit_price: float = 0
    price: float = 0
    total_price: float = 0


class QuotationWithItems(Quotation):
    quotation_items: List[QuotationItem] = []
    vendor: Optional[Vendor] = None
    vendor_documents: List[VendorDocument] = []


# ─── Input schemas ───

class QuotationItemInput(BaseModel):
    """Item as submitted by a client; prices are derived, not accepted"""
    name: str
    description: Optional[str] = None
    quantity: int = Field(ge=0)
    type_id: Optional[str] = None
    category_id: Optional[str] = None
    unit_price: float = Field(ge=0)


class QuotationCreate(BaseModel):
    """The quotation number is always assigned by the server"""
    project_name: str
    date: dt.date
    validity_date: dt.date
    budget_type: BudgetType
    recipient: str = ""
    currency_type: CurrencyType = CurrencyType.IQD
    vendor_id: Optional[str] = None
    vendor_cost: float = Field(default=0, ge=0)
    vendor_currency_type: CurrencyType = CurrencyType.IQD
    discount: float = Field(default=0, ge=0)
    discount_type: DiscountType = DiscountType.AMOUNT
    note: Optional[str] = None
    description: Optional[str] = None
    status: QuotationStatus = QuotationStatus.DRAFT
    items: List[QuotationItemInput] = []

    @field_validator("date", "validity_date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        return coerce_date(v)


class QuotationUpdate(BaseModel):
    project_name: Optional[str] = None
    date: Optional[dt.date] = None
    validity_date: Optional[dt.date] = None
    budget_type: Optional[BudgetType] = None
    recipient: Optional[str] = None
    currency_type: Optional[CurrencyType] = None
    vendor_id: Optional[str] = None
    vendor_cost: Optional[float] = Field(default=None, ge=0)
    vendor_currency_type: Optional[CurrencyType] = None
    discount: Optional[float] = Field(default=None, ge=0)
    discount_type: Optional[DiscountType] = None
    note: Optional[str] = None
    description: Optional[str] = None
    status: Optional[QuotationStatus] = None
    # None keeps the existing items, a list replaces all of them
    items: Optional[List[QuotationItemInput]] = None

    @field_validator("date", "validity_date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        return coerce_date(v)

    @field_validator(
        "project_name", "date", "validity_date", "budget_type", "recipient", "currency_type",
        "vendor_cost", "vendor_currency_type", "discount", "discount_type", "status",
        mode="before",
    )
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; only vendor_id, note and description may be cleared
        if v is None:
            raise ValueError("field cannot be null")
        return v
