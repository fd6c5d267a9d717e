# servicedesk/asset/schemas.py
from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from servicedesk.asset.models import AssetStatus
from servicedesk.core.sanitize import sanitize_string
from servicedesk.user.schemas import UserSummary


class AssetBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    type: str = Field(..., min_length=1, max_length=100)
    serial_number: str | None = Field(default=None, max_length=100)
    purchase_date: date | None = None

    @field_validator("name", "type", mode="before")
    @classmethod
    def clean_text(cls, value):
        return sanitize_string(value) if isinstance(value, str) else value

    @field_validator("serial_number", mode="before")
    @classmethod
    def blank_serial_is_none(cls, value):
        if isinstance(value, str):
            value = sanitize_string(value)
            return value or None
        return value


class AssetCreate(AssetBase):
    status: AssetStatus = AssetStatus.AVAILABLE


class AssetStatusUpdate(BaseModel):
    status: AssetStatus


class AssetAssign(BaseModel):
    # null unassigns
    assigned_user_id: int | None = Field(default=None, gt=0)


class AssetOut(BaseModel):
    id: int
    name: str
    type: str
    serial_number: str | None = None
    purchase_date: date | None = None
    status: AssetStatus
    assigned_user_id: int | None = None
    created_at: datetime
    assigned_user: UserSummary | None = None

    model_config = {"from_attributes": True}
