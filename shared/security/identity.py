"""
Identity providers.

The order core only needs "who is calling and are they an admin". Which
provider answers that is decided once at startup: JWT verification normally,
a permissive stub when MOCK_MODE is on.
"""
from dataclasses import dataclass
from typing import Optional, Protocol

from shared.config import settings

from .jwt_handler import verify_access_token

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass(frozen=True)
class CurrentUser:
    id: str
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class IdentityProvider(Protocol):
    def authenticate(self, token: Optional[str]) -> Optional[CurrentUser]: ...


class JwtIdentityProvider:
    """Trusts the `sub` and `role` claims of a valid bearer token."""

    def authenticate(self, token: Optional[str]) -> Optional[CurrentUser]:
        if not token:
            return None
        payload = verify_access_token(token)
        if payload is None:
            return None
        user_id = payload.get("sub")
        if not user_id:
            return None
        role = payload.get("role", ROLE_USER)
        if role not in (ROLE_USER, ROLE_ADMIN):
            return None
        return CurrentUser(id=str(user_id), role=role)


class MockIdentityProvider:
    """Any bearer token is accepted and mapped to the configured demo user."""

    def __init__(self, user_id: str = settings.MOCK_USER_ID, role: str = settings.MOCK_USER_ROLE):
        self.user = CurrentUser(id=user_id, role=role)

    def authenticate(self, token: Optional[str]) -> Optional[CurrentUser]:
        return self.user if token else None


def build_identity_provider() -> IdentityProvider:
    if settings.MOCK_MODE:
        return MockIdentityProvider()
    return JwtIdentityProvider()


identity_provider: IdentityProvider = build_identity_provider()
