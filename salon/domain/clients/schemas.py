"""Client domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text, validate_email


class ClientCreate(BaseModel):
    """Schema for creating a new client"""

    name: str
    email: str
    phone: Optional[str] = ""
    notes: Optional[str] = ""
    isVIP: bool = False
    isBadClient: bool = False

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)

    @field_validator("phone", "notes")
    @classmethod
    def default_blank(cls, v):
        return v or ""


class ClientUpdate(ClientCreate):
    """Schema for replacing an existing client's editable fields"""

    id: int
    appointments: Optional[list] = None
