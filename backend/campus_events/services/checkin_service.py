"""Check-in recorder and the QR ticket payload.

QR payload wire format is plain text ``"<event_code>:<user_id>"``.
"""
import logging
from typing import Any, Optional

from campus_events.exceptions import (
    DuplicateCheckInError,
    InvalidCodeError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from campus_events.models import CheckInMethod, EventCheckin
from campus_events.services import permissions
from campus_events.services.transactions import run_in_transaction
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)

QR_SEPARATOR = ":"


def build_qr_payload(event_code: str, user_id: str) -> str:
    return f"{event_code}{QR_SEPARATOR}{user_id}"


def parse_qr_payload(payload: str) -> tuple[str, str]:
    """Split a scanned payload into (event_code, user_id).

    Exactly two non-empty parts are required; anything else is rejected
    before any lookup happens.
    """
    parts = (payload or "").strip().split(QR_SEPARATOR)
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise InvalidCodeError("Malformed QR code")
    return parts[0].strip(), parts[1].strip()


def _parse_method(method) -> CheckInMethod:
    try:
        return CheckInMethod(method)
    except ValueError:
        raise ValidationError(f"Invalid check-in method: {method}")


def check_in_user(
    store: EventStore,
    event_id: str,
    target_user_id: str,
    acting_user_id: str,
    guest_count: int = 0,
    method=CheckInMethod.manual,
    notes: Optional[str] = None,
) -> EventCheckin:
    """Record attendance for ``target_user_id``.

    Organizers (society admins/moderators, platform admins) may check anyone
    in. A user may check themselves in with the ``self`` method when the event
    has check-in enabled. Walk-ins without an RSVP are accepted.
    """
    kind = _parse_method(method)
    if guest_count < 0:
        raise ValidationError("Guest count cannot be negative")

    def _work() -> EventCheckin:
        event = store.get_event(event_id)
        if not event:
            raise NotFoundError("Event not found")
        if kind == CheckInMethod.self_:
            if acting_user_id != target_user_id:
                raise UnauthorizedError("Self check-in is only available for your own attendance")
            if not event.check_in_enabled:
                raise ValidationError("Check-in is not enabled for this event")
        else:
            permissions.require_event_organizer(store, event, acting_user_id, "check in users")
        if not store.get_user(target_user_id):
            raise NotFoundError("User not found")
        if store.get_checkin(event_id, target_user_id):
            raise DuplicateCheckInError("User already checked in")

        rsvp = store.get_rsvp(event_id, target_user_id)
        return store.add_checkin(EventCheckin(
            event_id=event_id,
            user_id=target_user_id,
            rsvp_id=rsvp.rsvp_id if rsvp else None,
            checked_in_by=acting_user_id,
            check_in_method=kind,
            guest_count=guest_count,
            notes=notes,
        ))

    checkin = run_in_transaction(store, _work, "record the check-in")
    logger.info(
        "User %s checked in to event %s by %s via %s (%d guests)",
        target_user_id, event_id, acting_user_id, kind.value, guest_count,
    )
    return checkin


def check_in_scanned(
    store: EventStore,
    event_code: str,
    scanned_user_id: str,
    acting_user_id: str,
) -> dict[str, Any]:
    """Resolve a scanned event code and user, then check the user in via QR."""
    with store.transaction():
        event = store.get_event_by_code(event_code)
        if not event:
            raise InvalidCodeError("Invalid event code")
        if not event.check_in_enabled:
            raise InvalidCodeError("Check-in is not enabled for this event")
        user = store.get_user(scanned_user_id)
        if not user:
            raise InvalidCodeError("Invalid user code")

    checkin = check_in_user(
        store,
        event.event_id,
        user.user_id,
        acting_user_id,
        guest_count=0,
        method=CheckInMethod.qr,
    )
    return {"user": user, "event": event, "checkin": checkin}


def check_in_via_qr(store: EventStore, payload: str, acting_user_id: str) -> dict[str, Any]:
    event_code, user_id = parse_qr_payload(payload)
    return check_in_scanned(store, event_code, user_id, acting_user_id)


def undo_check_in(store: EventStore, event_id: str, target_user_id: str, acting_user_id: str) -> bool:
    """Delete a check-in. Returns False (not an error) when there was none."""

    def _work() -> bool:
        event = store.get_event(event_id)
        if not event:
            raise NotFoundError("Event not found")
        permissions.require_event_organizer(store, event, acting_user_id, "undo check-ins")
        return store.delete_checkin(event_id, target_user_id)

    removed = run_in_transaction(store, _work, "undo the check-in")
    if removed:
        logger.info("Check-in for user %s on event %s undone by %s", target_user_id, event_id, acting_user_id)
    else:
        logger.info("No check-in to undo for user %s on event %s", target_user_id, event_id)
    return removed


def list_event_checkins(store: EventStore, event_id: str) -> list[EventCheckin]:
    with store.transaction():
        if not store.get_event(event_id):
            raise NotFoundError("Event not found")
        return store.list_checkins(event_id)


def generate_ticket_qr_data(store: EventStore, event_id: str, user_id: str) -> dict[str, Any]:
    """Ticket contents for a user who has RSVP'd: the QR payload plus display fields."""
    with store.transaction():
        event = store.get_event(event_id)
        if not event:
            raise NotFoundError("Event not found")
        rsvp = store.get_rsvp(event_id, user_id)
        if not rsvp:
            raise NotFoundError("No RSVP found")
        return {
            "qr_data": build_qr_payload(event.event_code, user_id),
            "event_title": event.title,
            "status": rsvp.status,
        }
