"""Organizer-side event management.

- Authorization: only society admins/moderators (or platform admins) may
  create or change events
- Unique ``event_code`` generation for QR check-in correlation
- Capacity changes that open seats trigger the waitlist promotion sweep
"""
import logging
import secrets
from datetime import datetime
from typing import Any, Optional

from campus_events import utils
from campus_events.exceptions import NotFoundError, ValidationError
from campus_events.models import Event
from campus_events.services import permissions, rsvp_service
from campus_events.services.transactions import run_in_transaction
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)

EVENT_CODE_BYTES = 4
EVENT_CODE_ATTEMPTS = 5
UPDATABLE_FIELDS = (
    "title",
    "description",
    "location",
    "start_time",
    "end_time",
    "capacity",
    "rsvp_deadline",
    "allow_guests",
    "max_guests_per_rsvp",
    "check_in_enabled",
)
REQUIRED_FIELDS = ("title", "start_time", "allow_guests", "check_in_enabled")


def _generate_event_code(store: EventStore) -> str:
    for _ in range(EVENT_CODE_ATTEMPTS):
        code = secrets.token_hex(EVENT_CODE_BYTES).upper()
        if not store.event_code_exists(code):
            return code
    raise ValidationError("Could not allocate a unique event code")


def _validate_event(event: Event) -> None:
    start = utils.ensure_utc(event.start_time)
    end = utils.ensure_utc(event.end_time)
    if end is not None and end <= start:
        raise ValidationError("Event must end after it starts")
    if event.capacity is not None and event.capacity < 1:
        raise ValidationError("Capacity must be at least 1")
    if event.max_guests_per_rsvp is not None and event.max_guests_per_rsvp < 0:
        raise ValidationError("Maximum guests cannot be negative")


def create_event(
    store: EventStore,
    society_id: str,
    actor_user_id: str,
    title: str,
    start_time: datetime,
    end_time: Optional[datetime] = None,
    description: Optional[str] = None,
    location: Optional[str] = None,
    capacity: Optional[int] = None,
    rsvp_deadline: Optional[datetime] = None,
    allow_guests: bool = False,
    max_guests_per_rsvp: Optional[int] = None,
    check_in_enabled: bool = False,
) -> Event:
    def _work() -> Event:
        if not store.get_society(society_id):
            raise NotFoundError("Society not found")
        permissions.require_organizer(store, society_id, actor_user_id, "create events")
        event = Event(
            society_id=society_id,
            created_by=actor_user_id,
            title=title,
            description=description,
            location=location,
            start_time=utils.ensure_utc(start_time),
            end_time=utils.ensure_utc(end_time),
            capacity=capacity,
            rsvp_deadline=utils.ensure_utc(rsvp_deadline),
            allow_guests=allow_guests,
            max_guests_per_rsvp=max_guests_per_rsvp,
            check_in_enabled=check_in_enabled,
        )
        _validate_event(event)
        event.event_code = _generate_event_code(store)
        return store.add_event(event)

    event = run_in_transaction(store, _work, "create the event")
    logger.info("Created event '%s' (%s) in society %s by %s", title, event.event_id, society_id, actor_user_id)
    return event


def update_event(
    store: EventStore,
    event_id: str,
    actor_user_id: str,
    updates: dict[str, Any],
) -> Event:
    """Apply a partial update; sweeps the waitlist when seats may have opened."""

    def _work() -> tuple[Event, bool]:
        event = store.get_event(event_id, for_update=True)
        if not event:
            raise NotFoundError("Event not found")
        permissions.require_event_organizer(store, event, actor_user_id, "update this event")

        old_capacity = event.capacity
        for field, value in updates.items():
            if field not in UPDATABLE_FIELDS:
                continue
            if value is None and field in REQUIRED_FIELDS:
                raise ValidationError(f"{field} cannot be cleared")
            if isinstance(value, datetime):
                value = utils.ensure_utc(value)
            setattr(event, field, value)
        _validate_event(event)
        event.updated_at = utils.utcnow()

        # Re-capping an unlimited event also opens seats for rows left on the waitlist.
        opened = event.capacity is not None and (
            old_capacity is None or event.capacity > old_capacity
        )
        return event, opened

    event, seats_opened = run_in_transaction(store, _work, "update the event")
    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(updates)) or "no fields")
    if seats_opened:
        rsvp_service.run_promotion_sweep(store, event_id)
    return event
