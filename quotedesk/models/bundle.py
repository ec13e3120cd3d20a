"""
Bulk export/import bundle
"""
from datetime import datetime
from typing import Any, List

from pydantic import BaseModel


class ExportBundle(BaseModel):
    """Every collection in one document; records are kept as stored"""
    quotations: List[Any]
    quotation_items: List[Any]
    vendors: List[Any]
    recipients: List[Any]
    categories: List[Any]
    item_types: List[Any]
    exchange_rates: List[Any]
    settings: List[Any] = []
    vendor_documents: List[Any] = []
    exported_at: datetime
    version: str


class ImportResult(BaseModel):
    success: bool
    message: str
