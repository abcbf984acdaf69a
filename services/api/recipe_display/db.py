from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .settings import settings


class Base(DeclarativeBase):
    pass


_engine = None
_SessionLocal = None


def init_engine(database_url: str | None = None, **engine_kwargs):
    global _engine, _SessionLocal
    url = database_url or settings.database_url
    if url.startswith("sqlite"):
        engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
    _engine = create_engine(url, pool_pre_ping=True, **engine_kwargs)
    _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)
    return _engine


def get_engine():
    global _engine
    if _engine is None:
        init_engine()
    return _engine


def SessionLocal():
    global _SessionLocal
    if _SessionLocal is None:
        init_engine()
    return _SessionLocal


def create_tables() -> None:
    # Import models so they register on Base.metadata
    from . import models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def get_db():
    db = SessionLocal()()
    try:
        yield db
    finally:
        db.close()
