"""ORM models: importing this package registers every table on Base.metadata."""
from campus_events.models.user import Profile  # noqa: F401
from campus_events.models.society import Society, SocietyMember, MemberRole, MemberStatus  # noqa: F401
from campus_events.models.event import Event  # noqa: F401
from campus_events.models.rsvp import EventRSVP, RSVPStatus  # noqa: F401
from campus_events.models.checkin import EventCheckin, CheckInMethod  # noqa: F401
from campus_events.models.reminder import EventReminder, ReminderType  # noqa: F401
