# servicedesk/license/services.py
import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session, joinedload

from servicedesk.core.errors import NotFoundError
from servicedesk.license.models import SoftwareLicense
from servicedesk.license.schemas import LicenseCreate
from servicedesk.user.models import User

logger = logging.getLogger(__name__)

LICENSE_NOT_FOUND = "License not found"
USER_NOT_FOUND = "User not found"


def _check_user(db: Session, user_id: int | None) -> None:
    if user_id is not None and db.get(User, user_id) is None:
        raise NotFoundError(USER_NOT_FOUND)


def get_all_licenses(db: Session, expiring_within_days: int | None = None) -> list[SoftwareLicense]:
    query = db.query(SoftwareLicense).options(joinedload(SoftwareLicense.assigned_user))
    if expiring_within_days is not None:
        cutoff = date.today() + timedelta(days=expiring_within_days)
        query = query.filter(
            SoftwareLicense.expiry_date.is_not(None),
            SoftwareLicense.expiry_date <= cutoff,
        )
    return query.order_by(SoftwareLicense.created_at.desc(), SoftwareLicense.id.desc()).all()


def get_license(db: Session, license_id: int) -> SoftwareLicense:
    db_license = db.get(SoftwareLicense, license_id)
    if db_license is None:
        raise NotFoundError(LICENSE_NOT_FOUND)
    return db_license


def create_license(db: Session, payload: LicenseCreate) -> SoftwareLicense:
    _check_user(db, payload.assigned_user_id)
    db_license = SoftwareLicense(**payload.model_dump())
    db.add(db_license)
    db.commit()
    db.refresh(db_license)
    logger.info("License %s created for %s", db_license.id, db_license.vendor)
    return db_license


def assign_license(db: Session, license_id: int, assigned_user_id: int | None) -> SoftwareLicense:
    db_license = get_license(db, license_id)
    _check_user(db, assigned_user_id)
    db_license.assigned_user_id = assigned_user_id
    db.commit()
    db.refresh(db_license)
    logger.info("License %s assigned to %s", license_id, assigned_user_id or "nobody")
    return db_license
