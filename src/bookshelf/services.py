"""Service objects built once at process start and shared by every request."""

from __future__ import annotations

from dataclasses import dataclass

from .auth.tokens import TokenIssuer
from .config import Settings
from .repository import UserRepository


@dataclass
class Services:
    users: UserRepository
    tokens: TokenIssuer


def build_services(settings: Settings) -> Services:
    return Services(
        users=UserRepository(),
        tokens=TokenIssuer.from_settings(settings),
    )
