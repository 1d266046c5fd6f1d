from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool
from .config import settings

DATABASE_URL = settings.DATABASE_URL
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL must be set in environment")


def build_engine(url: str):
    kwargs = {"echo": False, "future": True}
    # sqlite: one connection per session, never shared across event loops
    if url.startswith("sqlite"):
        kwargs["poolclass"] = NullPool
    return create_async_engine(url, **kwargs)


def build_session_factory(bind) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, expire_on_commit=False, class_=AsyncSession)


engine = build_engine(DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)
Base = declarative_base()
