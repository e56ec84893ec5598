"""Async SQLAlchemy engine and the session dependency for the lead store."""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from leadscope.config import settings

# Plain postgresql:// URLs from the environment need the asyncpg driver
database_url = settings.DATABASE_URL.replace(
    "postgresql://", "postgresql+asyncpg://"
)

engine = create_async_engine(
    database_url,
    echo=settings.LOG_LEVEL == "DEBUG",
    pool_pre_ping=True,
)

# Leads stay loaded after commit for the response models
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


async def get_db():
    """FastAPI dependency yielding one session per request."""
    async with AsyncSessionLocal() as session:
        yield session


async def init_models():
    """Create the leads table on startup if it is missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
