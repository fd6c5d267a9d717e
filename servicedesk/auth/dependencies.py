# servicedesk/auth/dependencies.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from servicedesk.core.database import get_db
from servicedesk.core.errors import AuthenticationError, PermissionDeniedError
from servicedesk.core.security import decode_access_token
from servicedesk.user.models import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    try:
        user_id = int(payload["sub"])
    except ValueError as exc:
        raise AuthenticationError("Could not validate credentials") from exc

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError("Could not validate credentials")

    # rate limit keys and log lines use it
    request.state.user_id = user.id
    return user


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise PermissionDeniedError("Admin access required")
    return current_user
