"""Database engine and session for SQLite (dev) / PostgreSQL (prod)."""
from collections.abc import Generator
import os

from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL

# Runtime safety: when TESTING=true, never use production DB.
if os.environ.get("TESTING") == "true":
    url = DATABASE_URL
    if "chargehub.db" in url or (":memory:" not in url and "test" not in url.lower().split("?")[0]):
        raise RuntimeError(
            "Tests must not run against production. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "(or another test URL containing :memory: or 'test')."
        )


def build_engine(database_url: str):
    """Create an engine with the SQLite tweaks used by the app (shared by tests on file databases)."""
    connect_args = {"check_same_thread": False} if "sqlite" in database_url else {}
    engine_kw = {"connect_args": connect_args, "echo": False}
    # In-memory SQLite: use one connection so all sessions share the same DB.
    if "sqlite" in database_url and ":memory:" in database_url:
        engine_kw["poolclass"] = StaticPool
    engine = create_engine(database_url, **engine_kw)

    if "sqlite" in database_url:

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_conn, connection_record):
            # Let SQLAlchemy issue BEGIN itself so SAVEPOINTs and conditional updates
            # run inside real transactions (pysqlite defers BEGIN otherwise).
            dbapi_conn.isolation_level = None
            # Enable foreign keys so FK behaviour (cascade / set null) is consistent.
            dbapi_conn.execute("PRAGMA foreign_keys=ON")

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


_engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency: yield a DB session and close after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
