"""Appointment domain schemas - Pydantic models for validation"""

from typing import Literal

from pydantic import BaseModel, field_validator

from ...shared.validators import validate_date, validate_time

PENDING = "pending"
COMPLETE = "complete"

AppointmentStatus = Literal["pending", "complete", "deleted_by_user", "deleted_by_staff", "no_show"]


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment"""

    clientId: int
    staffId: int
    serviceId: int
    date: str
    time: str
    status: AppointmentStatus = PENDING

    @field_validator("date")
    @classmethod
    def check_date(cls, v):
        return validate_date(v)

    @field_validator("time")
    @classmethod
    def check_time(cls, v):
        return validate_time(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return PENDING
        return v.strip() if isinstance(v, str) else v


class AppointmentUpdate(AppointmentCreate):
    """Full replacement of an appointment's fields"""

    id: int


class AppointmentStatusUpdate(BaseModel):
    id: int
    status: AppointmentStatus
