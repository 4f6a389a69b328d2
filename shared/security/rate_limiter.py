from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from shared.config import settings

from .identity import identity_provider


def user_id_or_ip(request: Request) -> str:
    """
    Key function for SlowAPI.
    Uses the authenticated caller's id when the bearer token is valid.
    Falls back to the client's IP address if unauthenticated.
    """
    auth_header = request.headers.get("Authorization")

    if auth_header and auth_header.startswith("Bearer "):
        user = identity_provider.authenticate(auth_header.split(" ", 1)[1])
        if user is not None:
            return f"user:{user.id}"

    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=user_id_or_ip, enabled=settings.RATE_LIMIT_ENABLED)
