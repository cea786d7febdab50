"""Token manager for handling admin JWT access tokens."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import JWTError, jwt

from inkpost.configs import settings
from inkpost.schemas.auth import TokenData


def create_access_token(
    email: str,
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """
    Create a new access token for the admin account.

    Args:
        email: Admin e-mail, stored as the ``sub`` claim
        expires_delta: Optional expiration time delta

    Returns:
        tuple[str, datetime]: Encoded JWT and its expiry time
    """
    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": email,
        "jti": uuid4().hex,
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    }

    token = jwt.encode(
        to_encode,
        settings.SECRET_KEY.get_secret_value(),
        algorithm=settings.ALGORITHM,
    )
    return token, expire


def decode_access_token(token: str) -> TokenData | None:
    """
    Decode and validate an access token.

    Signature, expiry, issuer and audience are all checked.

    Args:
        token: JWT token string

    Returns:
        TokenData | None: Decoded token data or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY.get_secret_value(),
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    email: str | None = payload.get("sub")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")
    exp: int | None = payload.get("exp")

    if not email or not jti or not exp or token_type != "access":
        return None

    return TokenData(
        email=email,
        jti=jti,
        expires_at=datetime.fromtimestamp(exp, tz=UTC),
        token_type=token_type,
    )
