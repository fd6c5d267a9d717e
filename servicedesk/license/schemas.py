# servicedesk/license/schemas.py
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from servicedesk.core.sanitize import sanitize_string
from servicedesk.user.schemas import UserSummary


class LicenseCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    vendor: str = Field(..., min_length=1, max_length=100)
    license_key: str = Field(..., min_length=1, max_length=255)
    expiry_date: date | None = None
    assigned_user_id: int | None = Field(default=None, gt=0)

    @field_validator("name", "vendor", "license_key", mode="before")
    @classmethod
    def clean_text(cls, value):
        return sanitize_string(value) if isinstance(value, str) else value


class LicenseAssign(BaseModel):
    assigned_user_id: int | None = Field(default=None, gt=0)


class LicenseOut(BaseModel):
    id: int
    name: str
    vendor: str
    license_key: str
    expiry_date: date | None = None
    assigned_user_id: int | None = None
    created_at: datetime
    assigned_user: UserSummary | None = None

    model_config = {"from_attributes": True}
