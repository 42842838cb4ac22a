"""
Database Session Management

One engine per process, one session per request. Services receive the
request's session from app.api.v1.deps and commit their own changes.
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings


# SQL echo follows DEBUG; pre-ping drops connections the server closed
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# Objects are flushed on commit only; names and paths needed after a
# commit are read before it (attributes expire on commit)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency yielding the request's session.

    Tests override it to point at an in-memory database.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
