"""
Company settings (singleton record)
"""
from typing import Optional

from pydantic import BaseModel

from quotedesk.models.base import Record


class AppSettings(Record):
    company_address: Optional[str] = None
    logo_url: Optional[str] = None


class AppSettingsUpdate(BaseModel):
    company_address: Optional[str] = None
    logo_url: Optional[str] = None


class LogoUpload(BaseModel):
    data_url: str
    filename: str
