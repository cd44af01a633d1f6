"""Reminder scheduling: writes rows an external dispatcher consumes at ``remind_at``."""
import logging
from datetime import datetime, timedelta
from typing import Optional

from campus_events import utils
from campus_events.exceptions import NotFoundError, StoreError, ValidationError
from campus_events.models import EventReminder, ReminderType
from campus_events.services.transactions import run_in_transaction
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)

REMINDER_OFFSETS = {
    ReminderType.day_before: timedelta(hours=24),
    ReminderType.hour_before: timedelta(hours=1),
}


def compute_remind_at(
    start_time: datetime,
    reminder_type: ReminderType,
    custom_time: Optional[datetime] = None,
) -> datetime:
    if reminder_type == ReminderType.custom:
        if custom_time is None:
            raise ValidationError("Custom time required")
        return utils.ensure_utc(custom_time)
    return utils.ensure_utc(start_time) - REMINDER_OFFSETS[reminder_type]


def _parse_type(reminder_type) -> ReminderType:
    try:
        return ReminderType(reminder_type)
    except ValueError:
        raise ValidationError(f"Invalid reminder type: {reminder_type}")


def set_event_reminder(
    store: EventStore,
    event_id: str,
    user_id: str,
    reminder_type,
    custom_time: Optional[datetime] = None,
) -> EventReminder:
    """Schedule (or reschedule) one reminder type for a user; upserts on (event, user, type)."""
    kind = _parse_type(reminder_type)

    def _work() -> EventReminder:
        event = store.get_event(event_id)
        if not event:
            raise NotFoundError("Event not found")
        if not store.get_user(user_id):
            raise NotFoundError("User not found")
        remind_at = compute_remind_at(event.start_time, kind, custom_time)
        if remind_at <= utils.utcnow():
            raise ValidationError("Reminder time must be in the future")
        return store.upsert_reminder(event_id, user_id, kind, remind_at)

    reminder = run_in_transaction(store, _work, "set the reminder")
    logger.info("Reminder %s set for user %s on event %s", kind.value, user_id, event_id)
    return reminder


def remove_event_reminder(store: EventStore, event_id: str, user_id: str, reminder_type) -> bool:
    kind = _parse_type(reminder_type)
    with store.transaction():
        removed = store.delete_reminders(event_id, user_id, kind)
    return removed > 0


def list_reminders(store: EventStore, event_id: str, user_id: str) -> list[EventReminder]:
    with store.transaction():
        return store.list_reminders(event_id, user_id)


def schedule_default_reminder(
    store: EventStore,
    event_id: str,
    user_id: str,
    start_time: datetime,
) -> Optional[EventReminder]:
    """Best-effort 24h reminder for a new ``going`` RSVP.

    Skipped when that moment has already passed. Storage failures are logged
    and never propagate to the RSVP that triggered this.
    """
    remind_at = compute_remind_at(start_time, ReminderType.day_before)
    if remind_at <= utils.utcnow():
        return None
    try:
        with store.transaction():
            return store.upsert_reminder(event_id, user_id, ReminderType.day_before, remind_at)
    except StoreError:
        logger.exception("Failed to schedule reminder for user %s on event %s", user_id, event_id)
        return None
