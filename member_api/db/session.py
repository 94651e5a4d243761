"""Engine/session helpers for the SQL backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from member_api.core.config import get_settings

Base = declarative_base()


def _connect_args(url: str) -> dict:
    # Sync routes run in FastAPI's threadpool, so SQLite connections cross threads.
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


@lru_cache
def get_engine():
    settings = get_settings()
    url = (settings.database_url or "").strip()
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to use the SQL backend.")
    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        echo=settings.database_echo,
        connect_args=_connect_args(url),
    )


@lru_cache
def _get_sessionmaker():
    # Entities outlive their session: routers map them after the repository returns.
    return sessionmaker(bind=get_engine(), autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session() -> Session:
    """One unit of work; uncommitted changes are rolled back on close."""
    session: Session = _get_sessionmaker()()
    try:
        yield session
    finally:
        session.close()
