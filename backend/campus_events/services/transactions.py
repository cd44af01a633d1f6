"""Optimistic retry around EventStore transactions."""
import logging
from typing import Callable, TypeVar

from campus_events.config import settings
from campus_events.exceptions import CapacityRaceError, StoreConflictError
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(store: EventStore, work: Callable[[], T], description: str) -> T:
    """Run ``work`` in one store transaction, retrying on conflicts.

    Domain errors raised by ``work`` roll back and propagate immediately; only
    StoreConflictError is retried. Raises CapacityRaceError once the budget
    from ``RSVP_TRANSACTION_ATTEMPTS`` is spent.
    """
    attempts = max(1, settings.RSVP_TRANSACTION_ATTEMPTS)
    for attempt in range(1, attempts + 1):
        try:
            with store.transaction():
                return work()
        except StoreConflictError:
            logger.warning("%s hit a conflict (attempt %d/%d)", description, attempt, attempts)
    raise CapacityRaceError(f"Could not {description} due to concurrent updates, please try again")
