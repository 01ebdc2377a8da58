"""Signed access tokens (JWT, HS256)."""

from datetime import datetime, timedelta, timezone

import jwt

from core.config import AuthConfig
from core.errors import AuthError


JWT_ALGORITHM = "HS256"


def create_access_token(
    user_id: str, username: str, email: str, settings: AuthConfig
) -> str:
    """Sign a token carrying the user's identity, valid for the configured lifetime."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "username": username,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=settings.token_expire_minutes)).timestamp()),
    }
    return jwt.encode(payload, settings.token_secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, settings: AuthConfig) -> dict:
    """Verify signature and expiry and return the claims.

    Raises:
        AuthError: If the token is expired, tampered with or missing claims.
    """
    try:
        payload = jwt.decode(
            token,
            settings.token_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthError("Token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthError("Invalid token") from exc

    if not payload.get("username") or not payload.get("email"):
        raise AuthError("Invalid token")
    return payload
