# servicedesk/ticket/schemas.py
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from servicedesk.core.sanitize import sanitize_string
from servicedesk.ticket.models import TicketPriority, TicketStatus
from servicedesk.user.schemas import UserSummary


class TicketBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    priority: TicketPriority
    category: str = Field(..., min_length=1, max_length=100)

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def clean_text(cls, value):
        return sanitize_string(value) if isinstance(value, str) else value


class TicketCreate(TicketBase):
    pass


class TicketStatusUpdate(BaseModel):
    status: TicketStatus


class TicketAssign(BaseModel):
    assigned_to: int = Field(..., gt=0)


class TicketOut(BaseModel):
    id: int
    title: str
    description: str
    priority: TicketPriority
    category: str
    status: TicketStatus
    user_id: int
    assigned_to: int | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary | None = None
    assigned_user: UserSummary | None = None

    model_config = {"from_attributes": True}
