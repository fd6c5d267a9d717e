# servicedesk/search/schemas.py
from typing import Literal

from pydantic import BaseModel

from servicedesk.asset.schemas import AssetOut
from servicedesk.ticket.schemas import TicketOut
from servicedesk.user.schemas import UserWithCounts


class SearchResult(BaseModel):
    type: Literal["ticket", "asset", "user"]
    id: int
    title: str
    subtitle: str
    metadata: dict[str, str] = {}
    url: str


class UnifiedSearchResults(BaseModel):
    query: str = ""
    tickets: list[TicketOut] = []
    assets: list[AssetOut] = []
    users: list[UserWithCounts] = []
    results: list[SearchResult] = []
    total: int = 0
