"""Explicit authorization checks.

Platform admins bypass per-society checks; otherwise only approved
memberships confer a role.
"""
from typing import Optional

from campus_events.exceptions import UnauthorizedError
from campus_events.models import Event, MemberRole
from campus_events.store.base import EventStore

ORGANIZER_ROLES = (MemberRole.admin, MemberRole.moderator)


def is_platform_admin(store: EventStore, user_id: str) -> bool:
    user = store.get_user(user_id)
    return bool(user and user.is_admin)


def get_society_role(store: EventStore, society_id: str, user_id: str) -> Optional[MemberRole]:
    membership = store.get_membership(society_id, user_id)
    return membership.role if membership else None


def can_moderate_society(store: EventStore, society_id: str, user_id: str) -> bool:
    if is_platform_admin(store, user_id):
        return True
    return get_society_role(store, society_id, user_id) in ORGANIZER_ROLES


def require_organizer(store: EventStore, society_id: str, user_id: str, action: str) -> None:
    if not can_moderate_society(store, society_id, user_id):
        raise UnauthorizedError(f"Not authorized to {action}")


def require_event_organizer(store: EventStore, event: Event, user_id: str, action: str) -> None:
    require_organizer(store, event.society_id, user_id, action)


def is_society_admin(store: EventStore, society_id: str, user_id: str) -> bool:
    """Membership management is narrower than organizing: moderators are excluded."""
    if is_platform_admin(store, user_id):
        return True
    society = store.get_society(society_id)
    if society and society.created_by == user_id:
        return True
    return get_society_role(store, society_id, user_id) == MemberRole.admin


def require_society_admin(store: EventStore, society_id: str, user_id: str, action: str) -> None:
    if not is_society_admin(store, society_id, user_id):
        raise UnauthorizedError(f"Not authorized to {action}")
