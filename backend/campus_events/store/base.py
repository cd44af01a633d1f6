"""Store interface (repository pattern).

The RSVP engine depends only on this interface, never on a concrete client, so
that the capacity-check-then-write sequence can be wrapped in one transaction
whatever the backing store is.
"""
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Optional

from campus_events.models import (
    Event,
    EventCheckin,
    EventReminder,
    EventRSVP,
    Profile,
    ReminderType,
    RSVPStatus,
    Society,
    SocietyMember,
)


class EventStore(ABC):
    """Interface for event, RSVP, check-in and reminder persistence."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager["EventStore"]:
        """Run the enclosed reads and writes as one unit.

        Commits on success and rolls back on any exception. Implementations
        raise StoreConflictError for contention that a retry may resolve.
        """
        ...

    # --- events / identities -------------------------------------------

    @abstractmethod
    def get_event(self, event_id: str, for_update: bool = False) -> Optional[Event]:
        """Return an event by ID; ``for_update`` locks it until the transaction ends."""
        ...

    @abstractmethod
    def get_event_by_code(self, event_code: str) -> Optional[Event]:
        ...

    @abstractmethod
    def event_code_exists(self, event_code: str) -> bool:
        ...

    @abstractmethod
    def add_event(self, event: Event) -> Event:
        ...

    @abstractmethod
    def get_society(self, society_id: str) -> Optional[Society]:
        ...

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[Profile]:
        ...

    @abstractmethod
    def get_membership(self, society_id: str, user_id: str) -> Optional[SocietyMember]:
        ...

    @abstractmethod
    def get_member(self, society_id: str, user_id: str) -> Optional[SocietyMember]:
        """Return a membership row whatever its approval status."""
        ...

    @abstractmethod
    def add_member(self, member: SocietyMember) -> SocietyMember:
        ...

    @abstractmethod
    def delete_member(self, member: SocietyMember) -> None:
        ...

    @abstractmethod
    def count_admins(self, society_id: str) -> int:
        """Number of approved admin memberships in a society."""
        ...

    # --- RSVPs ----------------------------------------------------------

    @abstractmethod
    def list_rsvps(self, event_id: str, status: Optional[RSVPStatus] = None) -> list[EventRSVP]:
        """Return RSVPs for an event ordered by creation time ascending."""
        ...

    @abstractmethod
    def get_rsvp(self, event_id: str, user_id: str) -> Optional[EventRSVP]:
        ...

    @abstractmethod
    def add_rsvp(self, rsvp: EventRSVP) -> EventRSVP:
        ...

    @abstractmethod
    def delete_rsvp(self, event_id: str, user_id: str) -> Optional[EventRSVP]:
        """Delete and return the RSVP, or None if there was none."""
        ...

    @abstractmethod
    def list_waitlist(self, event_id: str, limit: int) -> list[EventRSVP]:
        """Return at most ``limit`` waitlisted RSVPs, oldest first."""
        ...

    @abstractmethod
    def promote_rsvp(self, rsvp_id: str) -> bool:
        """Move an RSVP from waitlist to going.

        Conditional on the row still being waitlisted; returns False when a
        concurrent sweep got there first.
        """
        ...

    # --- check-ins ------------------------------------------------------

    @abstractmethod
    def get_checkin(self, event_id: str, user_id: str) -> Optional[EventCheckin]:
        ...

    @abstractmethod
    def add_checkin(self, checkin: EventCheckin) -> EventCheckin:
        ...

    @abstractmethod
    def delete_checkin(self, event_id: str, user_id: str) -> bool:
        ...

    @abstractmethod
    def list_checkins(self, event_id: str) -> list[EventCheckin]:
        """Return check-ins for an event, most recent first."""
        ...

    # --- reminders ------------------------------------------------------

    @abstractmethod
    def upsert_reminder(
        self,
        event_id: str,
        user_id: str,
        reminder_type: ReminderType,
        remind_at: datetime,
    ) -> EventReminder:
        ...

    @abstractmethod
    def delete_reminders(
        self,
        event_id: str,
        user_id: str,
        reminder_type: Optional[ReminderType] = None,
    ) -> int:
        """Delete one reminder type, or all of a user's reminders for the event."""
        ...

    @abstractmethod
    def list_reminders(self, event_id: str, user_id: str) -> list[EventReminder]:
        ...
