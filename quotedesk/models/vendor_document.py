"""
Vendor documents attached to a quotation
"""
from enum import Enum

from quotedesk.models.base import Record


class DocumentType(str, Enum):
    QUOTATION = "quotation"
    INVOICE = "invoice"
    OTHER = "other"


class VendorDocument(Record):
    quotation_id: str
    file_name: str
    file_path: str
    file_size: int = 0
    file_type: str = ""
    document_type: DocumentType = DocumentType.QUOTATION
