# servicedesk/asset/services.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from servicedesk.asset.models import Asset, AssetStatus
from servicedesk.asset.schemas import AssetCreate
from servicedesk.core.errors import ConflictError, NotFoundError
from servicedesk.user.models import User

logger = logging.getLogger(__name__)

ASSET_NOT_FOUND = "Asset not found"
USER_NOT_FOUND = "User not found"
DUPLICATE_SERIAL = "An asset with this serial number already exists"


def get_all_assets(
    db: Session,
    *,
    status: AssetStatus | None = None,
    asset_type: str | None = None,
    assigned_user_id: int | None = None,
) -> list[Asset]:
    query = db.query(Asset).options(joinedload(Asset.assigned_user))
    if status:
        query = query.filter(Asset.status == status)
    if asset_type:
        query = query.filter(Asset.type == asset_type)
    if assigned_user_id is not None:
        query = query.filter(Asset.assigned_user_id == assigned_user_id)
    return query.order_by(Asset.created_at.desc(), Asset.id.desc()).all()


def get_asset(db: Session, asset_id: int) -> Asset:
    asset = db.get(Asset, asset_id)
    if asset is None:
        raise NotFoundError(ASSET_NOT_FOUND)
    return asset


def create_asset(db: Session, payload: AssetCreate) -> Asset:
    if payload.serial_number:
        exists = db.query(Asset.id).filter(Asset.serial_number == payload.serial_number).first()
        if exists:
            raise ConflictError(DUPLICATE_SERIAL)

    db_asset = Asset(**payload.model_dump())
    db.add(db_asset)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(DUPLICATE_SERIAL) from exc
    db.refresh(db_asset)
    logger.info("Asset %s created (%s)", db_asset.id, db_asset.type)
    return db_asset


def update_asset_status(db: Session, asset_id: int, status: AssetStatus) -> Asset:
    db_asset = get_asset(db, asset_id)
    db_asset.status = status
    db.commit()
    db.refresh(db_asset)
    logger.info("Asset %s status set to %s", asset_id, status.value)
    return db_asset


def assign_asset(db: Session, asset_id: int, assigned_user_id: int | None) -> Asset:
    """Hand the asset to a user, or back to the pool when ``assigned_user_id`` is None."""
    db_asset = get_asset(db, asset_id)
    if assigned_user_id is not None and db.get(User, assigned_user_id) is None:
        raise NotFoundError(USER_NOT_FOUND)

    db_asset.assigned_user_id = assigned_user_id
    db_asset.status = AssetStatus.ASSIGNED if assigned_user_id else AssetStatus.AVAILABLE
    db.commit()
    db.refresh(db_asset)
    logger.info("Asset %s assigned to %s", asset_id, assigned_user_id or "nobody")
    return db_asset
