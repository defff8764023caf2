from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool, StaticPool

from interpretlab.core.config import settings

Base = declarative_base()


def build_engine(url: str) -> AsyncEngine:
    """Create the async engine for a database URL."""
    if url.startswith("sqlite"):
        # an in-memory database lives as long as its single connection
        if ":memory:" in url or url.endswith("://"):
            return create_async_engine(
                url,
                echo=False,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(url, echo=False, poolclass=NullPool)
    return create_async_engine(
        url,
        echo=False,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=3600
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


engine = build_engine(settings.SQLALCHEMY_DATABASE_URL)

AsyncSessionLocal = build_session_factory(engine)


async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = None):
    # table classes must be registered on Base.metadata before create_all
    from interpretlab import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(bind: AsyncEngine = None):
    await (bind or engine).dispose()
