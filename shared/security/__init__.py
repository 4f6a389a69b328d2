from .jwt_handler import create_access_token, verify_access_token
from .identity import CurrentUser, ROLE_ADMIN, ROLE_USER, identity_provider
from .dependencies import get_current_user, get_optional_user, require_admin
from .rate_limiter import limiter, user_id_or_ip

__all__ = [
    "create_access_token",
    "verify_access_token",
    "CurrentUser",
    "ROLE_ADMIN",
    "ROLE_USER",
    "identity_provider",
    "get_current_user",
    "get_optional_user",
    "require_admin",
    "limiter",
    "user_id_or_ip"
]
