# servicedesk/dashboard/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from servicedesk.auth.dependencies import get_current_user
from servicedesk.core.database import get_db
from servicedesk.dashboard import services as dashboard_service
from servicedesk.dashboard.schemas import DashboardCharts, DashboardStats
from servicedesk.ticket.schemas import TicketOut
from servicedesk.user.models import User

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return dashboard_service.get_stats(db, current_user)


@router.get("/charts", response_model=DashboardCharts)
def charts(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return dashboard_service.get_charts(db, current_user)


@router.get("/recent-tickets", response_model=list[TicketOut])
def recent_tickets(
    limit: int = Query(default=dashboard_service.RECENT_TICKETS, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return dashboard_service.get_recent_tickets(db, current_user, limit)
