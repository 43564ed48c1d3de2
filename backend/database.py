import os
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from config import DATABASE_URL, DB_CONNECT_TIMEOUT
import logging

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite drops tzinfo on read, so store it without."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless this is set per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_engine(url: str):
    """Build an engine with pool and connect timeouts for the given URL."""
    engine_args = {}
    if url.startswith("sqlite"):
        engine_args["connect_args"] = {
            "check_same_thread": False,
            "timeout": DB_CONNECT_TIMEOUT,
        }
    else:
        # Production settings for PostgreSQL
        engine_args.update({
            "pool_size": 5,
            "max_overflow": 10,
            "pool_timeout": 30,
            "pool_recycle": 1800,
            "connect_args": {"connect_timeout": DB_CONNECT_TIMEOUT},
        })

    eng = create_engine(url, **engine_args, echo=False)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _enable_sqlite_foreign_keys)
    return eng


try:
    engine = make_engine(DATABASE_URL)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
except Exception as e:
    logger.error(f"Failed to create engine: {e}")
    raise

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create the data/ directory if needed, then create all tables."""
    bind = bind or engine
    if str(bind.url).startswith("sqlite:///./"):
        os.makedirs("data", exist_ok=True)

    # Import all models so they register with Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database initialized successfully.")
