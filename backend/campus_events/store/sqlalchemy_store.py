"""SQLAlchemy implementation of EventStore."""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.exceptions import StoreConflictError, StoreError
from campus_events.models import (
    Event,
    EventCheckin,
    EventReminder,
    EventRSVP,
    MemberRole,
    MemberStatus,
    Profile,
    ReminderType,
    RSVPStatus,
    Society,
    SocietyMember,
)
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)


class SqlAlchemyEventStore(EventStore):
    """EventStore over a SQLAlchemy session.

    The session is owned by the caller (a request or a test); this class only
    demarcates transactions on it.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator["SqlAlchemyEventStore"]:
        try:
            yield self
            self.db.commit()
        except (OperationalError, IntegrityError) as exc:
            self.db.rollback()
            logger.warning("Transaction conflict: %s", exc.orig)
            raise StoreConflictError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StoreError(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise

    def _query(self, *entities):
        # Sessions do not expire on commit; refresh identity-map rows on read.
        return self.db.query(*entities).populate_existing()

    # --- events / identities -------------------------------------------

    def get_event(self, event_id: str, for_update: bool = False) -> Optional[Event]:
        query = self._query(Event).filter(Event.event_id == event_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def get_event_by_code(self, event_code: str) -> Optional[Event]:
        return self._query(Event).filter(Event.event_code == event_code).first()

    def event_code_exists(self, event_code: str) -> bool:
        return self._query(Event.event_id).filter(Event.event_code == event_code).first() is not None

    def add_event(self, event: Event) -> Event:
        self.db.add(event)
        self.db.flush()
        return event

    def get_society(self, society_id: str) -> Optional[Society]:
        return self._query(Society).filter(Society.society_id == society_id).first()

    def get_user(self, user_id: str) -> Optional[Profile]:
        return self._query(Profile).filter(Profile.user_id == user_id).first()

    def get_membership(self, society_id: str, user_id: str) -> Optional[SocietyMember]:
        return (
            self._query(SocietyMember)
            .filter(
                SocietyMember.society_id == society_id,
                SocietyMember.user_id == user_id,
                SocietyMember.status == MemberStatus.approved,
            )
            .first()
        )

    def get_member(self, society_id: str, user_id: str) -> Optional[SocietyMember]:
        return (
            self._query(SocietyMember)
            .filter(SocietyMember.society_id == society_id, SocietyMember.user_id == user_id)
            .first()
        )

    def add_member(self, member: SocietyMember) -> SocietyMember:
        self.db.add(member)
        self.db.flush()
        return member

    def delete_member(self, member: SocietyMember) -> None:
        self.db.delete(member)
        self.db.flush()

    def count_admins(self, society_id: str) -> int:
        return (
            self.db.query(SocietyMember)
            .filter(
                SocietyMember.society_id == society_id,
                SocietyMember.role == MemberRole.admin,
                SocietyMember.status == MemberStatus.approved,
            )
            .count()
        )

    # --- RSVPs ----------------------------------------------------------

    def list_rsvps(self, event_id: str, status: Optional[RSVPStatus] = None) -> list[EventRSVP]:
        query = self._query(EventRSVP).filter(EventRSVP.event_id == event_id)
        if status is not None:
            query = query.filter(EventRSVP.status == status)
        return query.order_by(EventRSVP.created_at, EventRSVP.rsvp_id).all()

    def get_rsvp(self, event_id: str, user_id: str) -> Optional[EventRSVP]:
        return (
            self._query(EventRSVP)
            .filter(EventRSVP.event_id == event_id, EventRSVP.user_id == user_id)
            .first()
        )

    def add_rsvp(self, rsvp: EventRSVP) -> EventRSVP:
        self.db.add(rsvp)
        self.db.flush()
        return rsvp

    def delete_rsvp(self, event_id: str, user_id: str) -> Optional[EventRSVP]:
        rsvp = self.get_rsvp(event_id, user_id)
        if rsvp is None:
            return None
        # Walk-in history survives; the check-in just loses its RSVP link.
        self.db.query(EventCheckin).filter(EventCheckin.rsvp_id == rsvp.rsvp_id).update(
            {EventCheckin.rsvp_id: None}, synchronize_session=False
        )
        self.db.delete(rsvp)
        self.db.flush()
        return rsvp

    def list_waitlist(self, event_id: str, limit: int) -> list[EventRSVP]:
        return (
            self._query(EventRSVP)
            .filter(EventRSVP.event_id == event_id, EventRSVP.status == RSVPStatus.waitlist)
            .order_by(EventRSVP.created_at, EventRSVP.rsvp_id)
            .limit(limit)
            .all()
        )

    def promote_rsvp(self, rsvp_id: str) -> bool:
        result = self.db.execute(
            update(EventRSVP)
            .where(EventRSVP.rsvp_id == rsvp_id, EventRSVP.status == RSVPStatus.waitlist)
            .values(status=RSVPStatus.going)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    # --- check-ins ------------------------------------------------------

    def get_checkin(self, event_id: str, user_id: str) -> Optional[EventCheckin]:
        return (
            self._query(EventCheckin)
            .filter(EventCheckin.event_id == event_id, EventCheckin.user_id == user_id)
            .first()
        )

    def add_checkin(self, checkin: EventCheckin) -> EventCheckin:
        self.db.add(checkin)
        self.db.flush()
        return checkin

    def delete_checkin(self, event_id: str, user_id: str) -> bool:
        deleted = (
            self.db.query(EventCheckin)
            .filter(EventCheckin.event_id == event_id, EventCheckin.user_id == user_id)
            .delete(synchronize_session=False)
        )
        return deleted > 0

    def list_checkins(self, event_id: str) -> list[EventCheckin]:
        return (
            self._query(EventCheckin)
            .filter(EventCheckin.event_id == event_id)
            .order_by(EventCheckin.checked_in_at.desc())
            .all()
        )

    # --- reminders ------------------------------------------------------

    def upsert_reminder(
        self,
        event_id: str,
        user_id: str,
        reminder_type: ReminderType,
        remind_at: datetime,
    ) -> EventReminder:
        reminder = (
            self._query(EventReminder)
            .filter(
                EventReminder.event_id == event_id,
                EventReminder.user_id == user_id,
                EventReminder.reminder_type == reminder_type,
            )
            .first()
        )
        if reminder is None:
            reminder = EventReminder(
                event_id=event_id,
                user_id=user_id,
                reminder_type=reminder_type,
                remind_at=remind_at,
            )
            self.db.add(reminder)
        else:
            reminder.remind_at = remind_at
        self.db.flush()
        return reminder

    def delete_reminders(
        self,
        event_id: str,
        user_id: str,
        reminder_type: Optional[ReminderType] = None,
    ) -> int:
        query = self.db.query(EventReminder).filter(
            EventReminder.event_id == event_id,
            EventReminder.user_id == user_id,
        )
        if reminder_type is not None:
            query = query.filter(EventReminder.reminder_type == reminder_type)
        return query.delete(synchronize_session=False)

    def list_reminders(self, event_id: str, user_id: str) -> list[EventReminder]:
        return (
            self._query(EventReminder)
            .filter(EventReminder.event_id == event_id, EventReminder.user_id == user_id)
            .order_by(EventReminder.remind_at)
            .all()
        )
