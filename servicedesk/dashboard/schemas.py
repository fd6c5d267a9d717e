# servicedesk/dashboard/schemas.py
from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_tickets: int
    open_tickets: int
    total_assets: int
    assigned_assets: int


class CountItem(BaseModel):
    key: str
    count: int


class DailyCount(BaseModel):
    date: str
    count: int


class DashboardCharts(BaseModel):
    tickets_by_status: list[CountItem]
    tickets_by_priority: list[CountItem]
    assets_by_status: list[CountItem]
    assets_by_type: list[CountItem]
    tickets_over_time: list[DailyCount]
    assets_over_time: list[DailyCount]
