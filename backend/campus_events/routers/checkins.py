"""Check-in API routes."""
import logging
from fastapi import APIRouter, Depends, Query, status

from campus_events.schemas.checkin import (
    CheckInCreate,
    CheckInOut,
    QRCheckInRequest,
    QRCheckInResult,
    QREventOut,
    UndoCheckInResult,
)
from campus_events.schemas.user import ProfileOut
from campus_events.services import checkin_service
from campus_events.store import EventStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/events/{event_id}/checkins", response_model=CheckInOut, status_code=status.HTTP_201_CREATED)
def check_in_user(event_id: str, payload: CheckInCreate, store: EventStore = Depends(get_store)):
    """Check a user in (organizers, or the user themselves with method=self)."""
    return checkin_service.check_in_user(
        store,
        event_id=event_id,
        target_user_id=payload.user_id,
        acting_user_id=payload.actor_user_id,
        guest_count=payload.guest_count,
        method=payload.method,
        notes=payload.notes,
    )


@router.get("/events/{event_id}/checkins", response_model=list[CheckInOut])
def list_checkins(event_id: str, store: EventStore = Depends(get_store)):
    """Check-ins for an event, most recent first."""
    return checkin_service.list_event_checkins(store, event_id)


@router.delete("/events/{event_id}/checkins/{user_id}", response_model=UndoCheckInResult)
def undo_check_in(
    event_id: str,
    user_id: str,
    actor_user_id: str = Query(...),
    store: EventStore = Depends(get_store),
):
    """Undo a check-in; succeeds with removed=false when there was nothing to undo."""
    removed = checkin_service.undo_check_in(store, event_id, user_id, actor_user_id)
    return UndoCheckInResult(removed=removed)


@router.post("/checkins/qr", response_model=QRCheckInResult)
def check_in_via_qr(payload: QRCheckInRequest, store: EventStore = Depends(get_store)):
    """Check in from a scanned ``<event_code>:<user_id>`` ticket."""
    result = checkin_service.check_in_via_qr(store, payload.payload, payload.actor_user_id)
    return QRCheckInResult(
        user=ProfileOut.model_validate(result["user"]),
        event=QREventOut.model_validate(result["event"]),
    )
