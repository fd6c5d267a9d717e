# servicedesk/search/services.py
"""
Unified search across tickets, assets and users.

The three lookups are independent, so they run side by side on a small
thread pool, each with its own session. Each one asks the database for a
case-insensitive substring match, then re-checks the rows in Python with the
same predicate before the lists are capped and merged.

Only tickets are scoped by role: end users see their own tickets, admins see
all of them.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, aliased, joinedload

from servicedesk.asset.models import Asset
from servicedesk.asset.schemas import AssetOut
from servicedesk.search.schemas import SearchResult, UnifiedSearchResults
from servicedesk.ticket.models import Ticket
from servicedesk.ticket.schemas import TicketOut
from servicedesk.ticket.services import scope_to_user
from servicedesk.user.models import User
from servicedesk.user.schemas import UserWithCounts
from servicedesk.user.services import to_user_with_counts, users_with_counts_query

logger = logging.getLogger(__name__)

TICKET_LIMIT = 10
ASSET_FETCH_LIMIT = 20
USER_FETCH_LIMIT = 20
RESULT_LIMIT = 10


def matches_term(term: str, *values: str | None) -> bool:
    return any(value is not None and term in value.lower() for value in values)


def _like(column, term: str):
    return func.lower(column).contains(term, autoescape=True)


def search_tickets(db: Session, term: str, user: User) -> list[TicketOut]:
    owner = aliased(User)
    query = (
        db.query(Ticket)
        .join(owner, Ticket.user)
        .options(joinedload(Ticket.user), joinedload(Ticket.assigned_user))
        .filter(
            or_(
                _like(Ticket.title, term),
                _like(Ticket.description, term),
                _like(Ticket.category, term),
                _like(owner.name, term),
                _like(owner.email, term),
            )
        )
    )
    query = scope_to_user(query, user)

    rows = query.order_by(Ticket.created_at.desc(), Ticket.id.desc()).limit(TICKET_LIMIT).all()
    return [
        TicketOut.model_validate(ticket)
        for ticket in rows
        if matches_term(term, ticket.title, ticket.description, ticket.category, ticket.user.name, ticket.user.email)
    ]


def search_assets(db: Session, term: str) -> list[AssetOut]:
    holder = aliased(User)
    rows = (
        db.query(Asset)
        .outerjoin(holder, Asset.assigned_user)
        .options(joinedload(Asset.assigned_user))
        .filter(
            or_(
                _like(Asset.name, term),
                _like(Asset.type, term),
                _like(Asset.serial_number, term),
                _like(holder.name, term),
                _like(holder.email, term),
            )
        )
        .order_by(Asset.created_at.desc(), Asset.id.desc())
        .limit(ASSET_FETCH_LIMIT)
        .all()
    )
    matched = []
    for asset in rows:
        holder_name = asset.assigned_user.name if asset.assigned_user else None
        holder_email = asset.assigned_user.email if asset.assigned_user else None
        if matches_term(term, asset.name, asset.type, asset.serial_number, holder_name, holder_email):
            matched.append(AssetOut.model_validate(asset))
    return matched[:RESULT_LIMIT]


def search_users(db: Session, term: str) -> list[UserWithCounts]:
    rows = (
        users_with_counts_query(db)
        .filter(or_(_like(User.name, term), _like(User.email, term)))
        .limit(USER_FETCH_LIMIT)
        .all()
    )
    users = [to_user_with_counts(row) for row in rows]
    return [user for user in users if matches_term(term, user.name, user.email)][:RESULT_LIMIT]


def ticket_result(ticket: TicketOut) -> SearchResult:
    owner = ticket.user.name if ticket.user else ""
    return SearchResult(
        type="ticket",
        id=ticket.id,
        title=ticket.title,
        subtitle=" · ".join(part for part in (owner, ticket.category) if part),
        metadata={"status": ticket.status.value, "priority": ticket.priority.value},
        url=f"/tickets/{ticket.id}",
    )


def asset_result(asset: AssetOut) -> SearchResult:
    subtitle = asset.type if not asset.serial_number else f"{asset.type} · {asset.serial_number}"
    metadata = {"status": asset.status.value}
    return SearchResult(
        type="asset",
        id=asset.id,
        title=asset.name,
        subtitle=subtitle,
        metadata=metadata,
        url=f"/assets/{asset.id}",
    )


def user_result(user: UserWithCounts) -> SearchResult:
    return SearchResult(
        type="user",
        id=user.id,
        title=user.name,
        subtitle=user.email,
        metadata={"role": user.role.value},
        url=f"/users/{user.id}",
    )


def unified_search(db: Session, query: str, user: User) -> UnifiedSearchResults:
    if not query or not query.strip():
        return UnifiedSearchResults(query=query or "")

    term = query.strip().lower()
    bind = db.get_bind()

    def run(lookup, *args):
        with Session(bind=bind) as session:
            return lookup(session, term, *args)

    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="search") as pool:
        tickets_future = pool.submit(run, search_tickets, user)
        assets_future = pool.submit(run, search_assets)
        users_future = pool.submit(run, search_users)
        tickets = tickets_future.result()
        assets = assets_future.result()
        users = users_future.result()

    results = (
        [ticket_result(ticket) for ticket in tickets]
        + [asset_result(asset) for asset in assets]
        + [user_result(found) for found in users]
    )
    total = len(tickets) + len(assets) + len(users)
    logger.debug("Search %r by user %s matched %d rows", term, user.id, total)
    return UnifiedSearchResults(
        query=query,
        tickets=tickets,
        assets=assets,
        users=users,
        results=results,
        total=total,
    )
