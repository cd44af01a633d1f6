"""RSVP admission engine and waitlist promotion sweep.

Responsibilities:
- Admission: deadline and guest validation, capacity check, automatic
  waitlisting when a ``going`` RSVP would overflow the event
- At most one RSVP per (event, user); updates keep the first creation
  time so a waitlisted user never loses their place in the queue
- Promotion sweep after anything that frees capacity
- Read-side helpers: counts, a user's RSVP, attendee listing

Capacity recomputation and the RSVP write always run in one store
transaction with the event row locked, retried on conflict.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from campus_events import utils
from campus_events.config import settings
from campus_events.exceptions import (
    CampusEventsError,
    DeadlineExpiredError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from campus_events.models import Event, EventRSVP, RSVPStatus
from campus_events.services import permissions, reminder_service
from campus_events.services.counts import RSVPCounts, compute_rsvp_counts
from campus_events.services.transactions import run_in_transaction
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)

REQUESTABLE_STATUSES = (RSVPStatus.going, RSVPStatus.maybe, RSVPStatus.not_going)


@dataclass
class _Admission:
    rsvp: EventRSVP
    created: bool
    previous_status: Optional[RSVPStatus]
    previous_guests: int
    start_time: datetime


def _parse_status(status) -> RSVPStatus:
    try:
        requested = RSVPStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid RSVP status: {status}")
    if requested not in REQUESTABLE_STATUSES:
        raise ValidationError("Waitlist placement is decided by capacity and cannot be requested")
    return requested


def _check_deadline(event: Event) -> None:
    deadline = utils.ensure_utc(event.rsvp_deadline)
    if deadline is not None and deadline < utils.utcnow():
        raise DeadlineExpiredError("RSVP deadline has passed")


def _check_guests(event: Event, guest_count: int) -> None:
    if guest_count < 0:
        raise ValidationError("Guest count cannot be negative")
    if guest_count == 0:
        return
    if not event.allow_guests:
        raise ValidationError("This event does not allow guests")
    if event.max_guests_per_rsvp is not None and guest_count > event.max_guests_per_rsvp:
        raise ValidationError(f"Maximum {event.max_guests_per_rsvp} guests allowed")


def _load_event(store: EventStore, event_id: str, for_update: bool = False) -> Event:
    event = store.get_event(event_id, for_update=for_update)
    if not event:
        raise NotFoundError("Event not found")
    return event


def submit_rsvp(
    store: EventStore,
    event_id: str,
    user_id: str,
    status=RSVPStatus.going,
    guest_count: int = 0,
    notes: Optional[str] = None,
) -> EventRSVP:
    """Record a user's RSVP and return the stored row.

    The row's ``status`` is the effective outcome: a ``going`` request that
    would overflow capacity is stored as ``waitlist`` instead of failing.
    """
    requested = _parse_status(status)

    def _admit() -> _Admission:
        event = _load_event(store, event_id, for_update=True)
        if not store.get_user(user_id):
            raise NotFoundError("User not found")
        _check_deadline(event)
        _check_guests(event, guest_count)

        effective = requested
        # Guests only mean something for seat-holding statuses.
        guests = guest_count if requested == RSVPStatus.going else 0
        if requested == RSVPStatus.going and event.capacity is not None:
            counts = compute_rsvp_counts(store.list_rsvps(event_id), exclude_user_id=user_id)
            projected = counts.occupied + 1 + guests
            if projected > event.capacity:
                effective = RSVPStatus.waitlist
                logger.info(
                    "Event %s full (%d/%d); waitlisting user %s with %d guests",
                    event_id, counts.occupied, event.capacity, user_id, guests,
                )

        existing = store.get_rsvp(event_id, user_id)
        if existing:
            previous_status, previous_guests = existing.status, existing.guest_count
            existing.status = effective
            existing.guest_count = guests
            existing.notes = notes
            existing.updated_at = utils.utcnow()
            rsvp = existing
        else:
            previous_status, previous_guests = None, 0
            rsvp = store.add_rsvp(EventRSVP(
                event_id=event_id,
                user_id=user_id,
                status=effective,
                guest_count=guests,
                notes=notes,
            ))
        return _Admission(
            rsvp=rsvp,
            created=existing is None,
            previous_status=previous_status,
            previous_guests=previous_guests,
            start_time=event.start_time,
        )

    admission = run_in_transaction(store, _admit, "record the RSVP")
    rsvp = admission.rsvp
    logger.info(
        "User %s RSVP'd '%s' (requested '%s', %d guests) to event %s",
        user_id, rsvp.status.value, requested.value, rsvp.guest_count, event_id,
    )

    if admission.created and rsvp.status == RSVPStatus.going:
        reminder_service.schedule_default_reminder(store, event_id, user_id, admission.start_time)

    if admission.previous_status == RSVPStatus.going:
        seats_before = 1 + admission.previous_guests
        seats_after = 1 + rsvp.guest_count if rsvp.status == RSVPStatus.going else 0
        if seats_after < seats_before:
            run_promotion_sweep(store, event_id)
    return rsvp


def cancel_rsvp(store: EventStore, event_id: str, user_id: str) -> list[str]:
    """Delete a user's RSVP and reminders, then run the promotion sweep.

    Cancelling without an RSVP is a successful no-op. Returns the user IDs
    promoted off the waitlist; a failing sweep never undoes the cancellation.
    """

    def _cancel() -> Optional[EventRSVP]:
        _load_event(store, event_id, for_update=True)
        removed = store.delete_rsvp(event_id, user_id)
        store.delete_reminders(event_id, user_id)
        return removed

    removed = run_in_transaction(store, _cancel, "cancel the RSVP")
    if removed:
        logger.info("User %s cancelled RSVP (%s) for event %s", user_id, removed.status.value, event_id)
    return run_promotion_sweep(store, event_id)


def remove_attendee(store: EventStore, event_id: str, target_user_id: str, actor_user_id: str) -> list[str]:
    """Organizer-initiated RSVP removal; frees capacity like a cancellation."""

    def _remove() -> EventRSVP:
        event = _load_event(store, event_id, for_update=True)
        permissions.require_event_organizer(store, event, actor_user_id, "remove attendees")
        removed = store.delete_rsvp(event_id, target_user_id)
        if not removed:
            raise NotFoundError("RSVP not found")
        store.delete_reminders(event_id, target_user_id)
        return removed

    run_in_transaction(store, _remove, "remove the attendee")
    logger.info("User %s removed attendee %s from event %s", actor_user_id, target_user_id, event_id)
    return run_promotion_sweep(store, event_id)


def _available_spots(store: EventStore, event: Event) -> int:
    counts = compute_rsvp_counts(store.list_rsvps(event.event_id))
    return event.capacity - counts.occupied


def promote_from_waitlist(store: EventStore, event_id: str) -> list[str]:
    """Promote waitlisted RSVPs, oldest first, while capacity allows.

    A party too large for the remaining seats is skipped so smaller parties
    behind it can still be seated, unless ``WAITLIST_STRICT_FIFO`` is set, in
    which case the sweep stops there. Each promotion is its own transaction and
    a conditional update, so overlapping sweeps never double-promote and a
    failure part-way leaves earlier promotions in place for the next sweep to
    build on. Returns the promoted user IDs.
    """
    with store.transaction():
        event = _load_event(store, event_id)
        if event.capacity is None:
            return []
        if _available_spots(store, event) <= 0:
            return []
        candidates = [r.user_id for r in store.list_waitlist(event_id, settings.WAITLIST_SCAN_LIMIT)]

    promoted: list[str] = []
    for candidate in candidates:
        outcome = None
        try:
            with store.transaction():
                event = _load_event(store, event_id, for_update=True)
                rsvp = store.get_rsvp(event_id, candidate)
                if event.capacity is None:
                    outcome = "full"
                elif rsvp is None or rsvp.status != RSVPStatus.waitlist:
                    outcome = "gone"
                else:
                    available = _available_spots(store, event)
                    needed = 1 + (rsvp.guest_count or 0)
                    if available <= 0:
                        outcome = "full"
                    elif needed > available:
                        outcome = "skipped"
                    elif store.promote_rsvp(rsvp.rsvp_id):
                        outcome = "promoted"
                    else:
                        outcome = "gone"
        except StoreError:
            logger.exception("Failed to promote user %s on event %s; leaving for next sweep", candidate, event_id)
            continue

        if outcome == "promoted":
            promoted.append(candidate)
            logger.info("Promoted user %s from waitlist on event %s", candidate, event_id)
        elif outcome == "full":
            break
        elif outcome == "skipped" and settings.WAITLIST_STRICT_FIFO:
            break
    return promoted


def promote_as_organizer(store: EventStore, event_id: str, actor_user_id: str) -> list[str]:
    with store.transaction():
        event = _load_event(store, event_id)
        permissions.require_event_organizer(store, event, actor_user_id, "manage the waitlist")
    return promote_from_waitlist(store, event_id)


def run_promotion_sweep(store: EventStore, event_id: str) -> list[str]:
    """Best-effort sweep used after writes that free seats; failures are only logged."""
    try:
        return promote_from_waitlist(store, event_id)
    except (StoreError, CampusEventsError):
        logger.exception("Waitlist sweep failed for event %s", event_id)
        return []


def get_rsvp_counts(store: EventStore, event_id: str) -> RSVPCounts:
    with store.transaction():
        _load_event(store, event_id)
        return compute_rsvp_counts(store.list_rsvps(event_id))


def get_user_rsvp(store: EventStore, event_id: str, user_id: str) -> Optional[EventRSVP]:
    with store.transaction():
        _load_event(store, event_id)
        return store.get_rsvp(event_id, user_id)


def get_event_attendees(
    store: EventStore,
    event_id: str,
    status: Optional[RSVPStatus] = None,
) -> list[tuple[EventRSVP, bool]]:
    """RSVPs in arrival order, each paired with whether the user has checked in."""
    with store.transaction():
        _load_event(store, event_id)
        rsvps = store.list_rsvps(event_id, status)
        checked_in = {c.user_id for c in store.list_checkins(event_id)}
    return [(rsvp, rsvp.user_id in checked_in) for rsvp in rsvps]
