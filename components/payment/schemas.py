"""Pydantic schemas for payment data validation."""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Entity(BaseModel):
    """Schema for a party involved in a payment."""
    account_number: str = ""
    bank_id: str = ""
    name: str = ""

    @field_validator("account_number", "bank_id", "name", mode="before")
    @classmethod
    def null_as_empty(cls, value):
        return "" if value is None else value


# Values a JSON null binds to, so the payment rules report it.
EMPTY_VALUES = {
    "beneficiary": {},
    "debtor": {},
    "amount": 0.0,
    "currency": "",
    "description": "",
}


class PaymentBase(BaseModel):
    """Base payment schema.

    Every field defaults to its empty value so that a missing field is
    reported by the payment validation rules rather than by the binder.
    """
    beneficiary: Entity = Field(default_factory=Entity)
    debtor: Entity = Field(default_factory=Entity)
    amount: float = Field(default=0.0, allow_inf_nan=False)
    currency: str = ""
    date: Optional[datetime] = None
    description: str = ""

    @field_validator("beneficiary", "debtor", "amount", "currency", "description", mode="before")
    @classmethod
    def null_as_empty(cls, value, info: ValidationInfo):
        """Bind JSON null like a missing field."""
        if value is None:
            return EMPTY_VALUES[info.field_name]
        return value

    @field_validator("date")
    @classmethod
    def normalize_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class PaymentCreate(PaymentBase):
    """Schema for payment creation and replacement."""
    pass


class PaymentInDB(PaymentBase):
    """Schema for payment in database."""
    id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(default=None, exclude=True)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", "deleted_at")
    @classmethod
    def normalize_timestamps(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)


class Payment(PaymentInDB):
    """Schema for payment response."""
    pass
