"""
Exchange rate model
"""
import datetime as dt

from pydantic import BaseModel, Field, field_validator

from quotedesk.models.base import Record, coerce_date


class ExchangeRate(Record):
    """Local currency units per one USD, effective from `date`"""
    rate: float
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        return coerce_date(v)


class ExchangeRateCreate(BaseModel):
    rate: float = Field(gt=0)
    date: dt.date

    @field_validator("date", mode="before")
    @classmethod
    def accept_timestamps(cls, v):
        return coerce_date(v)
