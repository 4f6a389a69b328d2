from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

from shared.config import settings

DATABASE_URL = settings.DATABASE_URL

engine_options = {"echo": settings.SQL_ECHO}
if DATABASE_URL.startswith("sqlite"):
    # File-backed SQLite: one connection per session, no cross-loop pooling.
    engine_options["poolclass"] = NullPool

engine = create_async_engine(DATABASE_URL, **engine_options)

AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


async def init_models():
    """Create every table registered on Base. Models must be imported first."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
