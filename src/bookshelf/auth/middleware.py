"""Request authentication: turns an Authorization header into an AuthContext."""

from __future__ import annotations

from ..errors import TokenError
from ..logging import get_logger, set_request_context
from .context import ANONYMOUS, AuthContext
from .tokens import TokenIssuer

logger = get_logger(__name__)


def extract_token(authorization: str | None) -> str | None:
    """Pull the raw token out of an Authorization header value.

    Accepts ``Bearer <token>`` as well as a bare token.
    """
    if not authorization:
        return None

    value = authorization.strip()
    scheme, _, credentials = value.partition(" ")
    if scheme.lower() == "bearer":
        value = credentials.strip()

    return value or None


def resolve_auth_context(issuer: TokenIssuer, authorization: str | None) -> AuthContext:
    """
    Build the AuthContext for a request.

    Requests without a token, or with a token that fails verification, get an
    unauthenticated context. Resolvers that need a user decide what to do
    with that.
    """
    token = extract_token(authorization)
    if token is None:
        return ANONYMOUS

    try:
        principal = issuer.verify_token(token)
    except TokenError as e:
        logger.warning("Ignoring unverifiable token", error=str(e))
        return ANONYMOUS

    set_request_context(user_id=principal["user_id"])
    logger.debug("Request authenticated", username=principal.get("username"))

    return AuthContext(user=principal, token=token)
