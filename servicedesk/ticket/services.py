# servicedesk/ticket/services.py
import logging

from sqlalchemy.orm import Query, Session, joinedload

from servicedesk.core.errors import DomainValidationError, NotFoundError
from servicedesk.ticket.models import Ticket, TicketPriority, TicketStatus
from servicedesk.ticket.schemas import TicketCreate
from servicedesk.user.models import User, UserRole

logger = logging.getLogger(__name__)

TICKET_NOT_FOUND = "Ticket not found"
USER_NOT_FOUND = "User not found"


def scope_to_user(query: Query, user: User) -> Query:
    """Narrow a ticket query to what the user may see: everything for admins, own tickets otherwise."""
    if user.role != UserRole.ADMIN:
        query = query.filter(Ticket.user_id == user.id)
    return query


def visible_tickets(db: Session, user: User) -> Query:
    return scope_to_user(db.query(Ticket).options(joinedload(Ticket.user), joinedload(Ticket.assigned_user)), user)


def get_tickets(
    db: Session,
    user: User,
    *,
    status: TicketStatus | None = None,
    priority: TicketPriority | None = None,
    category: str | None = None,
    assigned_to: int | None = None,
) -> list[Ticket]:
    query = visible_tickets(db, user)
    if status:
        query = query.filter(Ticket.status == status)
    if priority:
        query = query.filter(Ticket.priority == priority)
    if category:
        query = query.filter(Ticket.category == category)
    if assigned_to is not None:
        query = query.filter(Ticket.assigned_to == assigned_to)
    return query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).all()


def get_ticket(db: Session, ticket_id: int) -> Ticket:
    ticket = db.get(Ticket, ticket_id)
    if ticket is None:
        raise NotFoundError(TICKET_NOT_FOUND)
    return ticket


def get_visible_ticket(db: Session, user: User, ticket_id: int) -> Ticket:
    # other people's tickets are reported as missing, not forbidden
    ticket = visible_tickets(db, user).filter(Ticket.id == ticket_id).first()
    if ticket is None:
        raise NotFoundError(TICKET_NOT_FOUND)
    return ticket


def create_ticket(db: Session, payload: TicketCreate, user_id: int) -> Ticket:
    if db.get(User, user_id) is None:
        raise NotFoundError(USER_NOT_FOUND)

    db_ticket = Ticket(**payload.model_dump(), user_id=user_id, status=TicketStatus.OPEN)
    db.add(db_ticket)
    db.commit()
    db.refresh(db_ticket)
    logger.info("Ticket %s created by user %s (%s)", db_ticket.id, user_id, db_ticket.priority.value)
    return db_ticket


def update_ticket_status(db: Session, ticket_id: int, status: TicketStatus) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    previous = db_ticket.status
    db_ticket.status = status
    db.commit()
    db.refresh(db_ticket)
    logger.info("Ticket %s status %s -> %s", ticket_id, previous.value, status.value)
    return db_ticket


def assign_ticket(db: Session, ticket_id: int, assigned_to: int) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    assignee = db.get(User, assigned_to)
    if assignee is None:
        raise NotFoundError(USER_NOT_FOUND)
    if assignee.role != UserRole.ADMIN:
        raise DomainValidationError("Only admin users can be assigned tickets")

    db_ticket.assigned_to = assignee.id
    db.commit()
    db.refresh(db_ticket)
    logger.info("Ticket %s assigned to user %s", ticket_id, assignee.id)
    return db_ticket
