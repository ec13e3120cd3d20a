from quotedesk.models.base import Record
from quotedesk.models.lookup import Vendor, Recipient, Category, ItemType, LookupCreate
from quotedesk.models.exchange_rate import ExchangeRate, ExchangeRateCreate
from quotedesk.models.app_settings import AppSettings, AppSettingsUpdate, LogoUpload
from quotedesk.models.vendor_document import VendorDocument, DocumentType
from quotedesk.models.quotation import (
    BudgetType,
    CurrencyType,
    QuotationStatus,
    DiscountType,
    Quotation,
    QuotationItem,
    QuotationWithItems,
    QuotationItemInput,
    QuotationCreate,
    QuotationUpdate,
)
from quotedesk.models.bundle import ExportBundle, ImportResult

__all__ = [
    "Record",
    "Vendor",
    "Recipient",
    "Category",
    "ItemType",
    "LookupCreate",
    "ExchangeRate",
    "ExchangeRateCreate",
    "AppSettings",
    "AppSettingsUpdate",
    "LogoUpload",
    "VendorDocument",
    "DocumentType",
    "BudgetType",
    "CurrencyType",
    "QuotationStatus",
    "DiscountType",
    "Quotation",
    "QuotationItem",
    "QuotationWithItems",
    "QuotationItemInput",
    "QuotationCreate",
    "QuotationUpdate",
    "ExportBundle",
    "ImportResult",
]
