"""Authentication types and utilities."""

import logging
from dataclasses import dataclass

from litestar import Request
from litestar.datastructures import State

from core.config import AuthConfig
from core.errors import AuthError
from core.tokens import decode_access_token


logger = logging.getLogger(__name__)


@dataclass
class Identity:
    """The authenticated caller, as carried by a verified access token."""

    id: str
    username: str
    email: str


def extract_bearer_token(authorization: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        raise AuthError("User is not authorized or token is missing")
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer" or not parts[1].strip():
        raise AuthError("User is not authorized or token is missing")
    return parts[1].strip()


def authenticate(authorization: str | None, settings: AuthConfig) -> Identity:
    """Verify the bearer credential and return the identity it carries."""
    token = extract_bearer_token(authorization)
    try:
        claims = decode_access_token(token, settings)
    except AuthError as exc:
        logger.info("Rejected bearer token: %s", exc.message)
        raise
    return Identity(id=claims["sub"], username=claims["username"], email=claims["email"])


def current_identity(identity: Identity | None) -> Identity:
    """Return the caller's identity; fails cleanly if authentication never ran."""
    if identity is None:
        raise AuthError("Not authenticated")
    return identity


async def provide_identity(request: Request, state: State) -> Identity:
    """Dependency provider that authenticates the request from its Authorization header."""
    return authenticate(request.headers.get("Authorization"), state.config.auth)
