# servicedesk/auth/services.py
"""
Login against the built-in demo accounts, then against users created
through the API (bcrypt hashes).

The demo accounts exist only here; on first login a matching ``User`` row
is created so tickets and assets can reference it.
"""

import logging
import secrets
from dataclasses import dataclass

from sqlalchemy.orm import Session

from servicedesk.core.errors import AuthenticationError
from servicedesk.core.sanitize import sanitize_email
from servicedesk.core.security import create_access_token, verify_password
from servicedesk.user.models import User, UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoAccount:
    name: str
    email: str
    role: UserRole
    password: str


DEMO_ACCOUNTS: dict[str, DemoAccount] = {
    account.email: account
    for account in (
        DemoAccount("End User", "user@company.com", UserRole.END_USER, "password123"),
        DemoAccount("Admin User", "admin@company.com", UserRole.ADMIN, "admin123"),
    )
}

INVALID_CREDENTIALS = "Invalid email or password"


def ensure_demo_user(db: Session, account: DemoAccount) -> User:
    user = db.query(User).filter(User.email == account.email).first()
    if user:
        return user
    user = User(name=account.name, email=account.email, role=account.role)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user row for demo account %s", account.email)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    email = sanitize_email(email)

    account = DEMO_ACCOUNTS.get(email)
    if account is not None:
        if not secrets.compare_digest(account.password.encode("utf-8"), password.encode("utf-8")):
            logger.warning("Login failed for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return ensure_demo_user(db, account)

    user = db.query(User).filter(User.email == email).first()
    if not user or not user.password_hash or not verify_password(password, user.password_hash):
        logger.warning("Login failed for %s", email)
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    user = authenticate_user(db, email, password)
    token = create_access_token(user.id, role=user.role.value)
    logger.info("User %s logged in", user.email)
    return token, user
