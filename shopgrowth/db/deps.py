"""FastAPI dependencies for database access."""
from __future__ import annotations

from typing import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session, sessionmaker

from shopgrowth.db.session import get_sessionmaker


def get_session_factory() -> sessionmaker:
    """Session factory for work that outlives the request, such as background notifications."""
    return get_sessionmaker()


def get_db(session_factory: sessionmaker = Depends(get_session_factory)) -> Iterator[Session]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
