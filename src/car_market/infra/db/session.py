from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from car_market.infra.db.config import database_url

# Created on first use so importing the app never needs a database
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the database engine (lazy initialization).

    Connection Pool Configuration:
    - pool_size: Number of connections to keep open (base pool)
    - max_overflow: Additional connections allowed beyond pool_size
    - pool_pre_ping: Verify connection health before use
    - pool_recycle: Recycle connections after N seconds

    Total max connections = pool_size + max_overflow
    """
    global _engine
    if _engine is None:
        _engine = create_engine(
            database_url(),
            pool_size=10,
            max_overflow=20,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


@contextmanager
def get_session() -> Iterator[Session]:
    """Get a database session with automatic commit/rollback."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
