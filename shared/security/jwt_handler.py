from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog
from jose import ExpiredSignatureError, JWTError, jwt

from shared.config import settings

logger = structlog.get_logger(__name__)

SECRET_KEY = settings.JWT_SECRET_KEY
if not SECRET_KEY and not settings.MOCK_MODE:
    raise ValueError("FATAL ERROR: JWT_SECRET_KEY is not set in the environment!")

ALGORITHM = settings.JWT_ALGORITHM


def create_access_token(user_id: str, role: str = "user", expires_delta: Optional[timedelta] = None) -> str:
    """
    Mints a bearer token carrying `sub` and `role`.
    The storefront never issues tokens itself; this is for the seed script and tests.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {"sub": str(user_id), "role": role, "iat": now, "exp": expire}
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def verify_access_token(token: str) -> dict | None:
    """Decodes and verifies the JWT. Returns the claims if valid, None if malformed or expired."""
    if not SECRET_KEY:
        return None
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except ExpiredSignatureError:
        logger.info("auth.token_expired")
        return None
    except JWTError:
        logger.info("auth.token_invalid")
        return None
