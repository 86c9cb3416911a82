"""
Database connection and session management.

This module provides the SQLAlchemy engine used to persist download audits,
version-check audits and issues.
"""

import os
from pathlib import Path
from typing import Generator

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session


# Load environment variables from a .env file in the working directory
env_path = Path.cwd() / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.environ.get("RELEASEHUB_DB_URL", "sqlite:///releasehub.db")


if DATABASE_URL.startswith("sqlite"):
    # SQLite doesn't support pool_size, max_overflow, or pool_recycle
    engine = create_engine(
        DATABASE_URL,
        connect_args={'check_same_thread': False},
        echo=False,
        future=True
    )
else:
    engine = create_engine(
        DATABASE_URL,
        pool_size=10,
        max_overflow=5,
        pool_pre_ping=True,    # Verify connections before checkout
        pool_recycle=3600,     # Recycle connections after 1 hour
        echo=False,
        future=True
    )


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True
)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and close it afterwards.

    Usage:
        db_gen = get_db()
        db = next(db_gen)
        AuditService(db).record_download("1.2.0", PlatformType.LINUX_PACKAGE)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """
    Create the audit and issue tables if they do not exist.
    """
    from releasehub.models import Base
    Base.metadata.create_all(bind=engine)
