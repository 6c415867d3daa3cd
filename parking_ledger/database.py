# parking_ledger/database.py
"""
Database connection, session management, and table creation.
The ledger persists into a single key-value table; SQLite by default,
any SQLAlchemy URL works.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from parking_ledger.config import settings


def build_engine(url: str):
    if url.startswith("sqlite"):
        # Sessions are opened from FastAPI's worker threads as well as the loop
        return create_engine(url, connect_args={"check_same_thread": False}, echo=False)
    return create_engine(
        url,
        pool_pre_ping=True,          # Auto-reconnect if DB connection drops
        pool_size=5,
        max_overflow=10,
        echo=False,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from parking_ledger.models.kv_entry import KeyValueEntry   # noqa

    Base.metadata.create_all(bind=bind or engine)
