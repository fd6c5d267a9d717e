# servicedesk/user/schemas.py
import re
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from servicedesk.asset.models import AssetStatus
from servicedesk.core.sanitize import sanitize_email, sanitize_string
from servicedesk.ticket.models import TicketStatus
from servicedesk.user.models import UserRole

_PASSWORD_RULE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


class UserSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    role: UserRole
    password: str = Field(..., min_length=6, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, value):
        return sanitize_string(value) if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def clean_email(cls, value):
        return sanitize_email(value) if isinstance(value, str) else value

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        if not _PASSWORD_RULE.match(value):
            raise ValueError(
                "Password must contain at least one lowercase letter, one uppercase letter, and one number"
            )
        return value


class UserRoleUpdate(BaseModel):
    role: UserRole


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime

    model_config = {"from_attributes": True}


class UserWithCounts(UserOut):
    ticket_count: int = 0
    asset_count: int = 0


class UserTicketItem(BaseModel):
    id: int
    title: str
    status: TicketStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class UserAssetItem(BaseModel):
    id: int
    name: str
    type: str
    status: AssetStatus

    model_config = {"from_attributes": True}


class UserProfile(UserOut):
    tickets: list[UserTicketItem] = []
    assets: list[UserAssetItem] = []
