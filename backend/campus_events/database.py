"""Engine, session factory and declarative base."""
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from campus_events.config import settings

Base = declarative_base()

SQLITE_BUSY_TIMEOUT = 30


def configure_sqlite(engine: Engine) -> None:
    """Make every SQLite transaction take the write lock when it begins.

    pysqlite defers BEGIN until the first write, which would let two
    admissions read the same counts. Emitting BEGIN IMMEDIATE ourselves
    serializes read-check-write sequences across connections.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )
        configure_sqlite(engine)
        return engine
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db():
    """FastAPI dependency yielding a session that is closed after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
