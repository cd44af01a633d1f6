"""RSVP, waitlist and ticket API routes, mounted under /api/events."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from campus_events.models.rsvp import RSVPStatus
from campus_events.schemas.rsvp import (
    AttendeeOut,
    CancelResult,
    RSVPCountsOut,
    RSVPOut,
    RSVPResult,
    RSVPSubmit,
    TicketOut,
)
from campus_events.services import checkin_service, rsvp_service
from campus_events.store import EventStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/{event_id}/rsvp", response_model=RSVPResult)
def submit_rsvp(event_id: str, payload: RSVPSubmit, store: EventStore = Depends(get_store)):
    """RSVP to an event. ``status`` in the response is the effective status."""
    rsvp = rsvp_service.submit_rsvp(
        store,
        event_id=event_id,
        user_id=payload.user_id,
        status=payload.status,
        guest_count=payload.guest_count,
        notes=payload.notes,
    )
    return RSVPResult(status=rsvp.status)


@router.delete("/{event_id}/rsvp", response_model=CancelResult)
def cancel_rsvp(event_id: str, user_id: str = Query(...), store: EventStore = Depends(get_store)):
    """Cancel the user's RSVP and promote from the waitlist."""
    promoted = rsvp_service.cancel_rsvp(store, event_id, user_id)
    return CancelResult(promoted_user_ids=promoted)


@router.get("/{event_id}/rsvp", response_model=Optional[RSVPOut])
def get_user_rsvp(event_id: str, user_id: str = Query(...), store: EventStore = Depends(get_store)):
    """The user's RSVP for this event, or null."""
    return rsvp_service.get_user_rsvp(store, event_id, user_id)


@router.get("/{event_id}/rsvp-counts", response_model=RSVPCountsOut)
def get_rsvp_counts(event_id: str, store: EventStore = Depends(get_store)):
    return rsvp_service.get_rsvp_counts(store, event_id).as_dict()


@router.get("/{event_id}/attendees", response_model=list[AttendeeOut])
def list_attendees(
    event_id: str,
    status: Optional[RSVPStatus] = Query(None),
    store: EventStore = Depends(get_store),
):
    """RSVPs in arrival order, flagged with check-in state."""
    attendees = rsvp_service.get_event_attendees(store, event_id, status)
    return [
        AttendeeOut.model_validate(rsvp).model_copy(update={"checked_in": checked_in})
        for rsvp, checked_in in attendees
    ]


@router.delete("/{event_id}/attendees/{user_id}", response_model=CancelResult)
def remove_attendee(
    event_id: str,
    user_id: str,
    actor_user_id: str = Query(..., description="ID of the organizer removing the attendee"),
    store: EventStore = Depends(get_store),
):
    """Organizer removes an RSVP; freed seats go to the waitlist."""
    promoted = rsvp_service.remove_attendee(store, event_id, user_id, actor_user_id)
    return CancelResult(promoted_user_ids=promoted)


@router.post("/{event_id}/waitlist/promote", response_model=CancelResult)
def promote_waitlist(
    event_id: str,
    actor_user_id: str = Query(...),
    store: EventStore = Depends(get_store),
):
    """Organizer-triggered promotion sweep."""
    promoted = rsvp_service.promote_as_organizer(store, event_id, actor_user_id)
    return CancelResult(promoted_user_ids=promoted)


@router.get("/{event_id}/ticket", response_model=TicketOut)
def get_ticket(event_id: str, user_id: str = Query(...), store: EventStore = Depends(get_store)):
    """QR ticket data for a user's RSVP."""
    return checkin_service.generate_ticket_qr_data(store, event_id, user_id)
