# servicedesk/ticket/routes.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from servicedesk.auth.dependencies import get_current_user, require_admin
from servicedesk.core.database import get_db
from servicedesk.core.rate_limit import CREATE_TICKET_LIMIT, limiter, user_key
from servicedesk.ticket import services as ticket_service
from servicedesk.ticket.models import TicketPriority, TicketStatus
from servicedesk.ticket.schemas import TicketAssign, TicketCreate, TicketOut, TicketStatusUpdate
from servicedesk.user.models import User

router = APIRouter(prefix="/tickets", tags=["Tickets"])


@router.post("/", response_model=TicketOut, status_code=201)
@limiter.limit(CREATE_TICKET_LIMIT, key_func=user_key)
def create(
    request: Request,
    ticket: TicketCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ticket_service.create_ticket(db, ticket, current_user.id)


@router.get("/", response_model=list[TicketOut])
def list_all(
    status: TicketStatus | None = Query(default=None, description="Filter by status"),
    priority: TicketPriority | None = Query(default=None, description="Filter by priority"),
    category: str | None = Query(default=None, description="Filter by category"),
    assigned_to: int | None = Query(default=None, description="Filter by assignee id"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ticket_service.get_tickets(
        db,
        current_user,
        status=status,
        priority=priority,
        category=category,
        assigned_to=assigned_to,
    )


@router.get("/{ticket_id}", response_model=TicketOut)
def get(ticket_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return ticket_service.get_visible_ticket(db, current_user, ticket_id)


@router.put("/{ticket_id}/status", response_model=TicketOut)
def update_status(
    ticket_id: int,
    payload: TicketStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return ticket_service.update_ticket_status(db, ticket_id, payload.status)


@router.put("/{ticket_id}/assign", response_model=TicketOut)
def assign(
    ticket_id: int,
    payload: TicketAssign,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return ticket_service.assign_ticket(db, ticket_id, payload.assigned_to)
