"""RSVP aggregate: the sole input to capacity decisions.

Computed from the RSVP rows inside the caller's transaction rather than cached,
so an admission decision always sees the rows it is about to race against.
"""
from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from campus_events.models import EventRSVP, RSVPStatus


@dataclass(frozen=True)
class RSVPCounts:
    going: int = 0
    maybe: int = 0
    waitlist: int = 0
    total_guests: int = 0

    @property
    def occupied(self) -> int:
        """Seats taken: each going RSVP plus the guests it brings."""
        return self.going + self.total_guests

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def compute_rsvp_counts(rsvps: Iterable[EventRSVP], exclude_user_id: Optional[str] = None) -> RSVPCounts:
    """Aggregate RSVPs into counts; ``total_guests`` sums guests of going RSVPs only.

    ``exclude_user_id`` leaves out a user's own row when it is about to be replaced.
    """
    going = maybe = waitlist = total_guests = 0
    for rsvp in rsvps:
        if exclude_user_id is not None and rsvp.user_id == exclude_user_id:
            continue
        if rsvp.status == RSVPStatus.going:
            going += 1
            total_guests += rsvp.guest_count or 0
        elif rsvp.status == RSVPStatus.maybe:
            maybe += 1
        elif rsvp.status == RSVPStatus.waitlist:
            waitlist += 1
    return RSVPCounts(going=going, maybe=maybe, waitlist=waitlist, total_guests=total_guests)
