"""
Common record fields shared by every stored entity
"""
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def coerce_date(value: Any) -> Any:
    """Accept full ISO timestamps where only the calendar date matters.

    Older data files store dates as e.g. "2024-06-01T21:00:00.000Z".
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10 and value[4] == "-" and value[10] in "T ":
        return value[:10]
    return value


class Record(BaseModel):
    """Base class for anything persisted in a collection file"""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(default_factory=new_id)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()

    def to_record(self) -> dict:
        return self.model_dump(mode="json")


def stamp(record: Record) -> Record:
    """Give a record a fresh id and matching created/updated timestamps"""
    now = utcnow()
    record.id = new_id()
    record.created_at = now
    record.updated_at = now
    return record


__all__ = ["Record", "new_id", "utcnow", "stamp", "coerce_date"]
