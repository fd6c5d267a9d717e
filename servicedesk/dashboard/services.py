# servicedesk/dashboard/services.py
from datetime import datetime, timedelta, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

from servicedesk.asset.models import Asset, AssetStatus
from servicedesk.dashboard.schemas import CountItem, DailyCount, DashboardCharts, DashboardStats
from servicedesk.ticket.models import Ticket, TicketPriority, TicketStatus
from servicedesk.ticket.services import scope_to_user, visible_tickets
from servicedesk.user.models import User

RECENT_TICKETS = 5
TIMELINE_DAYS = 30


def _enum_counts(rows, enum_cls) -> list[CountItem]:
    # every member shows up, zero when nothing matches
    counts = {_key(value): total for value, total in rows}
    return [CountItem(key=member.value, count=counts.get(member.value, 0)) for member in enum_cls]


def _key(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _timeline(rows) -> list[DailyCount]:
    return sorted(
        (DailyCount(date=str(day), count=total) for day, total in rows if day is not None),
        key=lambda item: item.date,
    )


def get_stats(db: Session, user: User) -> DashboardStats:
    ticket_query = scope_to_user(db.query(func.count(Ticket.id)), user)
    return DashboardStats(
        total_tickets=ticket_query.scalar() or 0,
        open_tickets=ticket_query.filter(Ticket.status == TicketStatus.OPEN).scalar() or 0,
        total_assets=db.query(func.count(Asset.id)).scalar() or 0,
        assigned_assets=db.query(func.count(Asset.id)).filter(Asset.status == AssetStatus.ASSIGNED).scalar() or 0,
    )


def get_charts(db: Session, user: User, now: datetime | None = None) -> DashboardCharts:
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    since = now - timedelta(days=TIMELINE_DAYS)

    tickets_by_status = scope_to_user(
        db.query(Ticket.status, func.count(Ticket.id)).group_by(Ticket.status), user
    ).all()
    tickets_by_priority = scope_to_user(
        db.query(Ticket.priority, func.count(Ticket.id)).group_by(Ticket.priority), user
    ).all()
    assets_by_status = db.query(Asset.status, func.count(Asset.id)).group_by(Asset.status).all()
    assets_by_type = (
        db.query(Asset.type, func.count(Asset.id))
        .group_by(Asset.type)
        .order_by(func.count(Asset.id).desc(), Asset.type)
        .all()
    )

    ticket_day = func.date(Ticket.created_at)
    tickets_over_time = scope_to_user(
        db.query(ticket_day, func.count(Ticket.id)).filter(Ticket.created_at >= since).group_by(ticket_day),
        user,
    ).all()
    asset_day = func.date(Asset.created_at)
    assets_over_time = (
        db.query(asset_day, func.count(Asset.id))
        .filter(Asset.created_at >= since)
        .group_by(asset_day)
        .all()
    )

    return DashboardCharts(
        tickets_by_status=_enum_counts(tickets_by_status, TicketStatus),
        tickets_by_priority=_enum_counts(tickets_by_priority, TicketPriority),
        assets_by_status=_enum_counts(assets_by_status, AssetStatus),
        assets_by_type=[CountItem(key=asset_type, count=total) for asset_type, total in assets_by_type],
        tickets_over_time=_timeline(tickets_over_time),
        assets_over_time=_timeline(assets_over_time),
    )


def get_recent_tickets(db: Session, user: User, limit: int = RECENT_TICKETS) -> list[Ticket]:
    return (
        visible_tickets(db, user)
        .order_by(Ticket.created_at.desc(), Ticket.id.desc())
        .limit(limit)
        .all()
    )
