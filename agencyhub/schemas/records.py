"""Schemas for raw records served by the AgencyHub REST API."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel


def coerce_date(value):
    """Truncate ISO datetimes to calendar dates; empty values become None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return value


def coerce_amount(value):
    if value is None or value == "":
        return Decimal("0")
    return value


class UpstreamRecord(BaseModel):
    """Base for camelCase records coming from the upstream API."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "ignore"


class FinancialRecord(UpstreamRecord):
    id: int
    client_id: Optional[int] = None
    type: str = "invoice"
    description: Optional[str] = None
    amount: Decimal = Decimal("0")
    status: str = "pending"
    due_date: Optional[date] = None
    paid_date: Optional[date] = None
    created_at: Optional[date] = None

    @field_validator("due_date", "paid_date", "created_at", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return coerce_date(value)

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return coerce_amount(value)


class Client(UpstreamRecord):
    id: int
    name: str = ""
    status: Optional[str] = None
    created_at: Optional[date] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return coerce_date(value)


class Opportunity(UpstreamRecord):
    id: int
    title: str = ""
    client_id: Optional[int] = None
    stage: Optional[str] = None
    value: Decimal = Decimal("0")
    probability: Optional[int] = None
    expected_close_date: Optional[date] = None

    @field_validator("expected_close_date", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return coerce_date(value)

    @field_validator("value", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return coerce_amount(value)


class Task(UpstreamRecord):
    id: int
    title: str = ""
    status: Optional[str] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_dates(cls, value):
        return coerce_date(value)


class Product(UpstreamRecord):
    id: int
    name: str = ""


class ProductSale(UpstreamRecord):
    id: int
    product_id: int
    amount: Decimal = Decimal("0")

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value):
        return coerce_amount(value)
