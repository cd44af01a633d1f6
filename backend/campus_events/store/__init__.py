from fastapi import Depends
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.store.base import EventStore
from campus_events.store.sqlalchemy_store import SqlAlchemyEventStore

__all__ = ["EventStore", "SqlAlchemyEventStore", "get_store"]


def get_store(db: Session = Depends(get_db)) -> EventStore:
    """FastAPI dependency wrapping the request session in an EventStore."""
    return SqlAlchemyEventStore(db)
