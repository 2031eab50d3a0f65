"""
Database setup for the minion tracker.
Uses a local SQLite file unless BCW_DATABASE_URL points somewhere else.
"""

import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from blokcity.config import DATABASE_URL as _CONFIGURED_URL

if _CONFIGURED_URL:
    DATABASE_URL = _CONFIGURED_URL
else:
    DB_DIR = os.path.dirname(os.path.abspath(__file__))
    DATABASE_URL = f"sqlite:///{os.path.join(DB_DIR, 'games.db')}"

# SQLite needs check_same_thread=False; other backends do not take that arg
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency that yields a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Create all tables."""
    # Import models so they register on Base.metadata
    from blokcity.api import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
