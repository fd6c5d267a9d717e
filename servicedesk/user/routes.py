# servicedesk/user/routes.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from servicedesk.auth.dependencies import get_current_user, require_admin
from servicedesk.core.database import get_db
from servicedesk.core.errors import NotFoundError
from servicedesk.core.rate_limit import CREATE_USER_LIMIT, limiter, shared_key
from servicedesk.user import services as user_service
from servicedesk.user.models import User
from servicedesk.user.schemas import UserCreate, UserOut, UserProfile, UserRoleUpdate, UserWithCounts

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", response_model=UserOut, status_code=201)
@limiter.limit(CREATE_USER_LIMIT, key_func=shared_key)
def create(
    request: Request,
    user: UserCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return user_service.create_user(db, user)


@router.get("/", response_model=list[UserWithCounts])
def list_all(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return user_service.get_users(db)


@router.get("/{user_id}", response_model=UserProfile)
def get(user_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if not current_user.is_admin and current_user.id != user_id:
        raise NotFoundError(user_service.USER_NOT_FOUND)
    return user_service.get_user(db, user_id)


@router.put("/{user_id}/role", response_model=UserOut)
def update_role(
    user_id: int,
    payload: UserRoleUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return user_service.update_user_role(db, user_id, payload.role)
