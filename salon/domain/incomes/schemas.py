"""Income domain schemas - Pydantic models for validation"""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import require_text, validate_date, validate_time

PaymentMethod = Literal["cash", "card", "check", "other"]


class IncomeCreate(BaseModel):
    """Schema for recording an income manually"""

    appointmentId: int
    clientName: str
    staffName: str
    serviceName: str
    amount: float = Field(allow_inf_nan=False)
    date: str
    time: str
    paymentMethod: PaymentMethod = "cash"
    notes: Optional[str] = ""

    @field_validator("clientName", "staffName", "serviceName")
    @classmethod
    def check_names(cls, v):
        return require_text(v)

    @field_validator("amount")
    @classmethod
    def check_amount(cls, v):
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return round(v, 2)

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return validate_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("notes")
    @classmethod
    def default_blank(cls, v):
        return v or ""


class IncomeUpdate(BaseModel):
    """Only payment method and notes of an income record are editable"""

    id: int
    paymentMethod: Optional[PaymentMethod] = None
    notes: Optional[str] = None


class IncomeFilters(BaseModel):
    """Filters accepted by the income list action"""

    dateFrom: Optional[str] = None
    dateTo: Optional[str] = None
    paymentMethod: Optional[PaymentMethod] = None
    staffName: Optional[str] = None
    serviceName: Optional[str] = None
    staffId: Optional[int] = None
    serviceId: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("paymentMethod", mode="before")
    @classmethod
    def all_methods(cls, v):
        if isinstance(v, str) and v.strip().lower() == "all":
            return None
        return v

    @field_validator("dateFrom", "dateTo")
    @classmethod
    def check_dates(cls, v):
        if v is None:
            return v
        return validate_date(v)
