"""User registration, login and current-user endpoints."""

import logging
from dataclasses import dataclass

import msgspec
from litestar import Controller, get, post
from litestar.datastructures import State

from core.auth import Identity, current_identity
from core.errors import AuthError, ConflictError, ValidationError
from core.password import hash_password, verify_password
from core.store import Store
from core.tokens import create_access_token


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Email or password is not valid"


class RegisterRequest(msgspec.Struct, forbid_unknown_fields=True):
    username: str
    email: str
    password: str


class LoginRequest(msgspec.Struct, forbid_unknown_fields=True):
    email: str
    password: str


@dataclass
class RegisteredUser:
    id: str
    email: str


class TokenResponse(msgspec.Struct):
    access_token: str = msgspec.field(name="accessToken")


def require_fields(**fields: str) -> None:
    """Reject empty values; missing keys never reach here because decoding fails first."""
    if not all(value and value.strip() for value in fields.values()):
        raise ValidationError("All fields are mandatory!")


class UsersController(Controller):
    path = "/api/users"
    tags = ["User"]

    @post("/register", status_code=201)
    async def register(self, store: Store, data: RegisterRequest) -> RegisteredUser:
        """Register a new user."""
        require_fields(username=data.username, email=data.email, password=data.password)

        if await store.find_user_by_email(data.email):
            raise ConflictError("User already registered!")

        password_hash = await hash_password(data.password)
        user = await store.insert_user(data.username, data.email, password_hash)
        logger.info("Registered user %s", user.id)
        return RegisteredUser(id=user.id, email=user.email)

    @post("/login", status_code=200)
    async def login(self, store: Store, state: State, data: LoginRequest) -> TokenResponse:
        """Exchange email and password for an access token.

        Unknown email and wrong password fail with the same message.
        """
        require_fields(email=data.email, password=data.password)

        user = await store.find_user_by_email(data.email)
        if not user or not await verify_password(data.password, user.password):
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        token = create_access_token(user.id, user.username, user.email, state.config.auth)
        return TokenResponse(access_token=token)

    @get("/current", security=[{"bearerAuth": []}])
    async def current(self, identity: Identity) -> Identity:
        """Get the current logged-in user's information."""
        return current_identity(identity)
