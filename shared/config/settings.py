import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


SERVICE_NAME = os.getenv("SERVICE_NAME", "art_gallery")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Mock mode swaps the identity provider and the catalog store for stub adapters.
MOCK_MODE = _flag("MOCK_MODE")
MOCK_USER_ID = os.getenv("MOCK_USER_ID", "mock-user-id")
MOCK_USER_ROLE = os.getenv("MOCK_USER_ROLE", "user")

DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "localhost")  # In Docker, this will be 'postgres'
DB_PORT = os.getenv("POSTGRES_PORT", "5432")
DB_NAME = os.getenv("POSTGRES_DB", "art_gallery")

DATABASE_URL = os.getenv("DATABASE_URL") or (
    "sqlite+aiosqlite:///./art_gallery_demo.db"
    if MOCK_MODE
    else f"postgresql+asyncpg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)
SQL_ECHO = _flag("SQL_ECHO")

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

ORDER_NUMBER_PREFIX = os.getenv("ORDER_NUMBER_PREFIX", "ART")
ORDER_NUMBER_MAX_ATTEMPTS = int(os.getenv("ORDER_NUMBER_MAX_ATTEMPTS", "5"))
STATUS_UPDATE_MAX_ATTEMPTS = int(os.getenv("STATUS_UPDATE_MAX_ATTEMPTS", "3"))

RATE_LIMIT_ENABLED = _flag("RATE_LIMIT_ENABLED", "true")
CHECKOUT_RATE_LIMIT = os.getenv("CHECKOUT_RATE_LIMIT", "10/minute")

OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT", "")
