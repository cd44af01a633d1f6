"""Society membership lifecycle.

- Joining creates a pending ``member`` row; platform admins join as approved admins
- Approval, rejection and role changes are reserved to society admins
- A user may always leave; removing someone else needs a society admin
- A society never loses its last approved admin
"""
import logging
from typing import Optional

from campus_events.exceptions import AlreadyMemberError, NotFoundError, ValidationError
from campus_events.models import MemberRole, MemberStatus, SocietyMember
from campus_events.services import permissions
from campus_events.services.transactions import run_in_transaction
from campus_events.store.base import EventStore

logger = logging.getLogger(__name__)


def _load_member(store: EventStore, society_id: str, user_id: str) -> SocietyMember:
    member = store.get_member(society_id, user_id)
    if not member:
        raise NotFoundError("Membership not found")
    return member


def _is_last_admin(store: EventStore, member: SocietyMember) -> bool:
    return (
        member.role == MemberRole.admin
        and member.status == MemberStatus.approved
        and store.count_admins(member.society_id) <= 1
    )


def join_society(store: EventStore, society_id: str, user_id: str) -> SocietyMember:
    def _work() -> SocietyMember:
        if not store.get_society(society_id):
            raise NotFoundError("Society not found")
        if not store.get_user(user_id):
            raise NotFoundError("User not found")
        existing = store.get_member(society_id, user_id)
        if existing:
            raise AlreadyMemberError(f"Already {existing.status.value}")

        platform_admin = permissions.is_platform_admin(store, user_id)
        return store.add_member(SocietyMember(
            society_id=society_id,
            user_id=user_id,
            role=MemberRole.admin if platform_admin else MemberRole.member,
            status=MemberStatus.approved if platform_admin else MemberStatus.pending,
        ))

    member = run_in_transaction(store, _work, "join the society")
    logger.info("User %s joined society %s (%s)", user_id, society_id, member.status.value)
    return member


def update_membership(
    store: EventStore,
    society_id: str,
    user_id: str,
    actor_user_id: str,
    role: Optional[MemberRole] = None,
    status: Optional[MemberStatus] = None,
) -> SocietyMember:
    """Approve/reject a membership or change its role (society admins only)."""

    def _work() -> SocietyMember:
        permissions.require_society_admin(store, society_id, actor_user_id, "manage members")
        member = _load_member(store, society_id, user_id)
        demoting = (role is not None and role != MemberRole.admin) or (
            status is not None and status != MemberStatus.approved
        )
        if demoting and _is_last_admin(store, member):
            raise ValidationError("Cannot demote the only admin of a society")
        if role is not None:
            member.role = role
        if status is not None:
            member.status = status
        return member

    member = run_in_transaction(store, _work, "update the membership")
    logger.info(
        "User %s set membership of %s in society %s to %s/%s",
        actor_user_id, user_id, society_id, member.role.value, member.status.value,
    )
    return member


def remove_membership(store: EventStore, society_id: str, user_id: str, actor_user_id: str) -> None:
    """Leave a society, or remove another member as a society admin."""

    def _work() -> None:
        if actor_user_id != user_id:
            permissions.require_society_admin(store, society_id, actor_user_id, "remove members")
        member = _load_member(store, society_id, user_id)
        if _is_last_admin(store, member):
            raise ValidationError("Cannot remove the only admin of a society")
        store.delete_member(member)

    run_in_transaction(store, _work, "remove the membership")
    logger.info("User %s removed %s from society %s", actor_user_id, user_id, society_id)
