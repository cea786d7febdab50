from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Token(BaseModel):
    """Token schema for JWT access tokens."""

    access_token: str
    token_type: str = "bearer"
    expires_at: datetime | None = None


class TokenData(BaseModel):
    """Token data schema for extracted token payload."""

    email: str
    jti: str
    expires_at: datetime
    token_type: str = "access"


class Identity(BaseModel):
    """The signed-in admin as seen by request handlers."""

    model_config = ConfigDict(frozen=True)

    email: str
    jti: str
    expires_at: datetime


class SessionStatus(BaseModel):
    """Answer to "is an admin session active" for the presented token."""

    model_config = ConfigDict(populate_by_name=True)

    authenticated: bool
    identity: Identity | None = None
