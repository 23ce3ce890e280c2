from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...auth.passwords import hash_password, verify_password
from ...errors import AuthenticationError, ValidationError
from ...inputs import NewUser, parse_input
from ...logging import get_logger
from ..types.auth import AuthPayload
from ..types.user import User

if TYPE_CHECKING:
    from ..context import BookshelfContext
    from ..mutations.root import CreateUserInput

logger = get_logger(__name__)

# Same message whether the user is unknown or the password is wrong
INVALID_CREDENTIALS = "Invalid credentials"


async def resolve_get_user(
    info: strawberry.Info, id: strawberry.ID | None, username: str | None
) -> User | None:
    """
    Resolve one user matching either the id or the username.

    Asking with neither identifier returns None rather than an arbitrary user.
    """
    if id is None and username is None:
        logger.info("getUser called without an id or username")
        return None

    context: BookshelfContext = info.context
    user = await context.services.users.find_user(id=id, username=username)
    if user is None:
        logger.info("User not found", id=id, username=username)
        return None

    return User.from_model(user)


async def create_user(info: strawberry.Info, input: CreateUserInput | None) -> AuthPayload:
    """Register a user, storing only a hash of the password."""
    if input is None:
        raise ValidationError("input: Field required")

    new_user = parse_input(
        NewUser,
        {"username": input.username, "email": input.email, "password": input.password},
    )

    context: BookshelfContext = info.context
    user = await context.services.users.create_user(
        username=new_user.username,
        email=new_user.email,
        password_hash=hash_password(new_user.password),
    )
    token = context.services.tokens.issue_token(user)

    logger.info("User created", user_id=str(user.id), username=user.username)
    return AuthPayload(token=token, user=User.from_model(user))


async def login_user(
    info: strawberry.Info, username_or_email: str | None, password: str | None
) -> AuthPayload:
    """
    Authenticate by username or email.

    An unknown user and a wrong password raise the same error.
    """
    if not username_or_email or password is None:
        raise AuthenticationError(INVALID_CREDENTIALS)

    context: BookshelfContext = info.context
    user = await context.services.users.find_by_username_or_email(username_or_email)

    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected")
        raise AuthenticationError(INVALID_CREDENTIALS)

    token = context.services.tokens.issue_token(user)

    logger.info("User logged in", user_id=str(user.id))
    return AuthPayload(token=token, user=User.from_model(user))
