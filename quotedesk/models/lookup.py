"""
Named lookup entities (create-or-reuse by name)
"""
from pydantic import BaseModel, field_validator

from quotedesk.models.base import Record


class LookupRecord(Record):
    name: str


class Vendor(LookupRecord):
    pass


class Recipient(LookupRecord):
    pass


class Category(LookupRecord):
    pass


class ItemType(LookupRecord):
    pass


class LookupCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v
