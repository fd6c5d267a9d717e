# servicedesk/user/services.py
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from servicedesk.asset.models import Asset
from servicedesk.core.errors import ConflictError, NotFoundError
from servicedesk.core.security import get_password_hash
from servicedesk.ticket.models import Ticket
from servicedesk.user.models import User, UserRole
from servicedesk.user.schemas import UserCreate, UserOut, UserWithCounts

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"
DUPLICATE_EMAIL = "A user with this email already exists"


def users_with_counts_query(db: Session) -> Query:
    """Users joined with how many tickets they own and assets they hold."""
    ticket_counts = (
        db.query(Ticket.user_id.label("user_id"), func.count(Ticket.id).label("total"))
        .group_by(Ticket.user_id)
        .subquery()
    )
    asset_counts = (
        db.query(Asset.assigned_user_id.label("user_id"), func.count(Asset.id).label("total"))
        .group_by(Asset.assigned_user_id)
        .subquery()
    )
    return (
        db.query(
            User,
            func.coalesce(ticket_counts.c.total, 0),
            func.coalesce(asset_counts.c.total, 0),
        )
        .outerjoin(ticket_counts, ticket_counts.c.user_id == User.id)
        .outerjoin(asset_counts, asset_counts.c.user_id == User.id)
        .order_by(User.created_at.desc(), User.id.desc())
    )


def to_user_with_counts(row) -> UserWithCounts:
    user, ticket_count, asset_count = row
    return UserWithCounts(
        **UserOut.model_validate(user).model_dump(),
        ticket_count=ticket_count,
        asset_count=asset_count,
    )


def get_users(db: Session) -> list[UserWithCounts]:
    return [to_user_with_counts(row) for row in users_with_counts_query(db).all()]


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, payload: UserCreate) -> User:
    if get_user_by_email(db, payload.email):
        raise ConflictError(DUPLICATE_EMAIL)

    db_user = User(
        name=payload.name,
        email=payload.email,
        role=payload.role,
        password_hash=get_password_hash(payload.password),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL) from exc
    db.refresh(db_user)
    logger.info("Created user %s (%s)", db_user.id, db_user.role.value)
    return db_user


def update_user_role(db: Session, user_id: int, role: UserRole) -> User:
    db_user = get_user(db, user_id)
    db_user.role = role
    db.commit()
    db.refresh(db_user)
    logger.info("User %s role changed to %s", user_id, role.value)
    return db_user
