"""
Database configuration and session management
"""
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from menuhub.config import get_settings

settings = get_settings()


def get_async_url(url: str) -> str:
    """Convert database URL to async variant"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://")
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


def url_is_sqlite(url: str) -> bool:
    return get_async_url(url).startswith("sqlite")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite doesn't support pool_size"""
    async_url = get_async_url(url)
    engine_kwargs = {"echo": echo, "future": True}
    if not url_is_sqlite(async_url):
        engine_kwargs["pool_size"] = 20
        engine_kwargs["max_overflow"] = 10
    return create_async_engine(async_url, **engine_kwargs)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


database_url = get_async_url(settings.DATABASE_URL)
is_sqlite = url_is_sqlite(database_url)

engine = build_engine(database_url, echo=settings.DEBUG)
AsyncSessionLocal = build_session_factory(engine)

# Base class for models
Base = declarative_base()


async def create_tables(bind: AsyncEngine = engine) -> None:
    # Models must be imported so their tables register on Base.metadata
    import menuhub.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
