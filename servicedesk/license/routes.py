# servicedesk/license/routes.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from servicedesk.auth.dependencies import require_admin
from servicedesk.core.database import get_db
from servicedesk.license import services as license_service
from servicedesk.license.schemas import LicenseAssign, LicenseCreate, LicenseOut

router = APIRouter(prefix="/licenses", tags=["Licenses"], dependencies=[Depends(require_admin)])


@router.post("/", response_model=LicenseOut, status_code=201)
def create(payload: LicenseCreate, db: Session = Depends(get_db)):
    return license_service.create_license(db, payload)


@router.get("/", response_model=list[LicenseOut])
def list_all(
    expiring_within_days: int | None = Query(
        default=None, ge=0, description="Only licenses expiring within this many days"
    ),
    db: Session = Depends(get_db),
):
    return license_service.get_all_licenses(db, expiring_within_days)


@router.get("/{license_id}", response_model=LicenseOut)
def get(license_id: int, db: Session = Depends(get_db)):
    return license_service.get_license(db, license_id)


@router.put("/{license_id}/assign", response_model=LicenseOut)
def assign(license_id: int, payload: LicenseAssign, db: Session = Depends(get_db)):
    return license_service.assign_license(db, license_id, payload.assigned_user_id)
