"""Service catalog schemas - Pydantic models for validation"""

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import require_text


class ServiceCreate(BaseModel):
    """Schema for creating a salon service"""

    name: str
    duration: int
    price: float = Field(allow_inf_nan=False)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v)

    @field_validator("duration")
    @classmethod
    def check_duration(cls, v):
        if v < 1:
            raise ValueError("Duration must be at least 1 minute")
        return v

    @field_validator("price")
    @classmethod
    def check_price(cls, v):
        if v < 0:
            raise ValueError("Price cannot be negative")
        return round(v, 2)


class ServiceUpdate(ServiceCreate):
    id: int
