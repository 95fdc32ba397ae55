# ludoteca/database.py
"""Engine and session factory behind the library's document store.

Postgres (asyncpg) in production, SQLite (aiosqlite) in tests; the tables are
plain string columns so both run the same schema.
"""

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from ludoteca.config import settings

Base = declarative_base()


def _engine_options(url: str) -> dict:
    if make_url(url).get_backend_name() == "sqlite":
        return {}
    # pooled server connections can go stale between refresh runs
    return {"pool_pre_ping": True}


engine = create_async_engine(settings.DATABASE_URL, echo=False, **_engine_options(settings.DATABASE_URL))

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


async def create_tables():
    """Create the boardgames table on startup if it does not exist yet."""

    # registers BoardGame on Base.metadata
    import ludoteca.models.board_game  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine():
    await engine.dispose()
