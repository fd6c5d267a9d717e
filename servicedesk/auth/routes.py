# servicedesk/auth/routes.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from servicedesk.auth import services as auth_service
from servicedesk.auth.dependencies import get_current_user
from servicedesk.auth.schemas import LoginRequest, TokenOut
from servicedesk.core.database import get_db
from servicedesk.core.rate_limit import LOGIN_LIMIT, limiter
from servicedesk.user.models import User
from servicedesk.user.schemas import UserOut

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=TokenOut)
@limiter.limit(LOGIN_LIMIT)
def login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
    token, user = auth_service.login(db, payload.email, payload.password)
    return TokenOut(access_token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)):
    return current_user
