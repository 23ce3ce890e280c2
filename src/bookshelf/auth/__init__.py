"""Authentication for Bookshelf: password hashing, tokens and request context."""

from .context import ANONYMOUS, AuthContext
from .middleware import resolve_auth_context
from .passwords import hash_password, verify_password
from .tokens import Principal, TokenIssuer

__all__ = [
    "ANONYMOUS",
    "AuthContext",
    "Principal",
    "TokenIssuer",
    "hash_password",
    "resolve_auth_context",
    "verify_password",
]
