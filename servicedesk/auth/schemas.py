# servicedesk/auth/schemas.py
from pydantic import BaseModel, Field

from servicedesk.user.schemas import UserOut


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=100)


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut
