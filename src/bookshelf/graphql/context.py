"""
Request-scoped context handed to every resolver as ``info.context``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

if TYPE_CHECKING:
    from ..auth.context import AuthContext
    from ..services import Services


class BookshelfContext(BaseContext):
    """Services plus the caller's authentication for one request."""

    def __init__(self, services: Services, auth: AuthContext):
        super().__init__()
        self.services = services
        self.auth = auth
