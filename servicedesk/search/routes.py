# servicedesk/search/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from servicedesk.auth.dependencies import get_current_user
from servicedesk.core.database import get_db
from servicedesk.search import services as search_service
from servicedesk.search.schemas import UnifiedSearchResults
from servicedesk.user.models import User

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/", response_model=UnifiedSearchResults)
def search(
    q: str = Query(default="", max_length=200, description="Text to look for"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return search_service.unified_search(db, q, current_user)
