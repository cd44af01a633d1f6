"""Event API routes: delegates to event_service for organizer checks."""
import logging
from typing import Optional
from datetime import datetime
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.models.event import Event
from campus_events.schemas.event import EventCreate, EventUpdate, EventOut
from campus_events.services import event_service
from campus_events.store import EventStore, get_store

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, store: EventStore = Depends(get_store)):
    """Create a new event (society admins/moderators only)."""
    return event_service.create_event(
        store,
        society_id=payload.society_id,
        actor_user_id=payload.created_by,
        title=payload.title,
        start_time=payload.start_time,
        end_time=payload.end_time,
        description=payload.description,
        location=payload.location,
        capacity=payload.capacity,
        rsvp_deadline=payload.rsvp_deadline,
        allow_guests=payload.allow_guests,
        max_guests_per_rsvp=payload.max_guests_per_rsvp,
        check_in_enabled=payload.check_in_enabled,
    )


@router.get("/", response_model=list[EventOut])
def list_events(
    society_id: Optional[str] = Query(None),
    start_after: Optional[datetime] = Query(None),
    start_before: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
):
    """List events with optional filters."""
    query = db.query(Event)
    if society_id:
        query = query.filter(Event.society_id == society_id)
    if start_after:
        query = query.filter(Event.start_time >= start_after)
    if start_before:
        query = query.filter(Event.start_time <= start_before)
    return query.order_by(Event.start_time).all()


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    """Fetch a single event by ID."""
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


@router.patch("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    actor_user_id: str = Query(..., description="ID of the organizer performing the update"),
    store: EventStore = Depends(get_store),
):
    """Update an event (organizers only); raising capacity promotes from the waitlist."""
    return event_service.update_event(
        store,
        event_id=event_id,
        actor_user_id=actor_user_id,
        updates=payload.model_dump(exclude_unset=True),
    )
