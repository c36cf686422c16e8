# backend/core/database.py

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import settings
from .query_logger import setup_query_logging

DATABASE_URL = settings.database_url


def build_engine(url: str) -> Engine:
    """Create an engine with pooling suited to the database backend."""
    engine_kwargs = {
        "echo": settings.log_sql_queries,
        "pool_pre_ping": True,
    }

    if url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if url in {"sqlite://", "sqlite:///:memory:"}:
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow

    new_engine = create_engine(url, **engine_kwargs)

    if url.startswith("sqlite"):
        enable_sqlite_foreign_keys(new_engine)

    setup_query_logging(new_engine)
    return new_engine


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """Turn on ON DELETE CASCADE support for every SQLite connection."""

    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
