"""Staff domain schemas - Pydantic models for validation"""

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text, validate_email


class StaffCreate(BaseModel):
    """Schema for creating a staff member"""

    name: str
    role: str
    email: str

    @field_validator("name", "role")
    @classmethod
    def check_text(cls, v):
        return require_text(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return validate_email(v)


class StaffUpdate(StaffCreate):
    id: int
