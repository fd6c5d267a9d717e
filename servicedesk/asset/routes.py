# servicedesk/asset/routes.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from servicedesk.asset import services as asset_service
from servicedesk.asset.models import AssetStatus
from servicedesk.asset.schemas import AssetAssign, AssetCreate, AssetOut, AssetStatusUpdate
from servicedesk.auth.dependencies import get_current_user, require_admin
from servicedesk.core.database import get_db
from servicedesk.core.rate_limit import CREATE_ASSET_LIMIT, limiter, shared_key
from servicedesk.user.models import User

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.post("/", response_model=AssetOut, status_code=201)
@limiter.limit(CREATE_ASSET_LIMIT, key_func=shared_key)
def create(
    request: Request,
    asset: AssetCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return asset_service.create_asset(db, asset)


@router.get("/", response_model=list[AssetOut])
def list_all(
    status: AssetStatus | None = Query(default=None, description="Filter by status"),
    type: str | None = Query(default=None, description="Filter by asset type"),
    assigned_user_id: int | None = Query(default=None, description="Filter by holder"),
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return asset_service.get_all_assets(
        db, status=status, asset_type=type, assigned_user_id=assigned_user_id
    )


@router.get("/{asset_id}", response_model=AssetOut)
def get(asset_id: int, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return asset_service.get_asset(db, asset_id)


@router.put("/{asset_id}/status", response_model=AssetOut)
def update_status(
    asset_id: int,
    payload: AssetStatusUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return asset_service.update_asset_status(db, asset_id, payload.status)


@router.put("/{asset_id}/assign", response_model=AssetOut)
def assign(
    asset_id: int,
    payload: AssetAssign,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return asset_service.assign_asset(db, asset_id, payload.assigned_user_id)
