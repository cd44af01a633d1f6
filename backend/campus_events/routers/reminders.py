"""Event reminder API routes, mounted under /api/events."""
import logging
from fastapi import APIRouter, Depends, Query, status

from campus_events.models.reminder import ReminderType
from campus_events.schemas.reminder import ReminderOut, ReminderSet
from campus_events.services import reminder_service
from campus_events.store import EventStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.put("/{event_id}/reminders", response_model=ReminderOut)
def set_reminder(event_id: str, payload: ReminderSet, store: EventStore = Depends(get_store)):
    """Set (or move) a reminder of the given type."""
    return reminder_service.set_event_reminder(
        store,
        event_id=event_id,
        user_id=payload.user_id,
        reminder_type=payload.reminder_type,
        custom_time=payload.custom_time,
    )


@router.get("/{event_id}/reminders", response_model=list[ReminderOut])
def list_reminders(event_id: str, user_id: str = Query(...), store: EventStore = Depends(get_store)):
    return reminder_service.list_reminders(store, event_id, user_id)


@router.delete("/{event_id}/reminders/{reminder_type}", status_code=status.HTTP_204_NO_CONTENT)
def remove_reminder(
    event_id: str,
    reminder_type: ReminderType,
    user_id: str = Query(...),
    store: EventStore = Depends(get_store),
):
    reminder_service.remove_event_reminder(store, event_id, user_id, reminder_type)
