"""Tests for event creation and updates.

Covers:
- Organizer-only create/update (society admins, moderators, platform admins)
- Field validation (end after start, positive capacity)
- Unique event codes
- Raising capacity promotes waitlisted RSVPs
"""
from datetime import datetime, timedelta, timezone

import pytest

from campus_events.exceptions import NotFoundError, UnauthorizedError, ValidationError
from campus_events.models import MemberRole, MemberStatus, RSVPStatus
from campus_events.services import event_service, rsvp_service
from tests.conftest import (
    add_member,
    create_test_event,
    create_test_society,
    create_test_user,
    make_event,
    make_user,
)


def _setup(client):
    """Create an organizer, an approved plain member, and their society."""
    organizer = create_test_user(client, name="Organizer")
    member = create_test_user(client, name="Member")
    society = create_test_society(client, creator_id=organizer["user_id"])
    sid = society["society_id"]
    client.post(f"/api/societies/{sid}/members", json={"user_id": member["user_id"]})
    client.patch(
        f"/api/societies/{sid}/members/{member['user_id']}",
        params={"actor_user_id": organizer["user_id"]},
        json={"status": "approved"},
    )
    return organizer, member, society


class TestEventCreate:
    """Event creation through the API."""

    def test_create_event(self, client):
        organizer, _, society = _setup(client)
        event = create_test_event(client, society["society_id"], organizer["user_id"],
                                  title="Games Night", capacity=30)
        assert event["title"] == "Games Night"
        assert event["capacity"] == 30
        assert event["society_id"] == society["society_id"]
        assert len(event["event_code"]) == 8

    def test_event_codes_are_unique(self, client):
        organizer, _, society = _setup(client)
        codes = {
            create_test_event(client, society["society_id"], organizer["user_id"])["event_code"]
            for _ in range(5)
        }
        assert len(codes) == 5

    def test_member_cannot_create_event(self, client):
        _, member, society = _setup(client)
        resp = client.post("/api/events/", json={
            "society_id": society["society_id"],
            "created_by": member["user_id"],
            "title": "Rogue Event",
            "start_time": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
        })
        assert resp.status_code == 403
        assert resp.json()["error"] == "unauthorized"

    def test_platform_admin_can_create_event(self, client):
        organizer, _, society = _setup(client)
        staff = create_test_user(client, name="Staff", is_admin=True)
        event = create_test_event(client, society["society_id"], staff["user_id"])
        assert event["created_by"] == staff["user_id"]

    def test_unknown_society(self, client):
        organizer, _, _ = _setup(client)
        resp = client.post("/api/events/", json={
            "society_id": "00000000-0000-0000-0000-000000000000",
            "created_by": organizer["user_id"],
            "title": "Nowhere",
            "start_time": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
        })
        assert resp.status_code == 404

    def test_end_before_start_rejected(self, client):
        organizer, _, society = _setup(client)
        start = datetime.now(timezone.utc) + timedelta(days=1)
        resp = client.post("/api/events/", json={
            "society_id": society["society_id"],
            "created_by": organizer["user_id"],
            "title": "Backwards",
            "start_time": start.isoformat(),
            "end_time": (start - timedelta(hours=1)).isoformat(),
        })
        assert resp.status_code == 400
        assert resp.json()["error"] == "validation_error"

    def test_zero_capacity_rejected(self, client):
        organizer, _, society = _setup(client)
        resp = client.post("/api/events/", json={
            "society_id": society["society_id"],
            "created_by": organizer["user_id"],
            "title": "Empty Room",
            "start_time": (datetime.now(timezone.utc) + timedelta(days=1)).isoformat(),
            "capacity": 0,
        })
        assert resp.status_code == 422


class TestEventRead:

    def test_get_event(self, client):
        organizer, _, society = _setup(client)
        event = create_test_event(client, society["society_id"], organizer["user_id"])
        resp = client.get(f"/api/events/{event['event_id']}")
        assert resp.status_code == 200
        assert resp.json()["event_code"] == event["event_code"]

    def test_get_event_not_found(self, client):
        assert client.get("/api/events/00000000-0000-0000-0000-000000000000").status_code == 404

    def test_list_events_by_society(self, client):
        organizer, _, society = _setup(client)
        other = create_test_society(client, creator_id=organizer["user_id"], name="Other")
        create_test_event(client, society["society_id"], organizer["user_id"], title="Ours")
        create_test_event(client, other["society_id"], organizer["user_id"], title="Theirs")

        resp = client.get("/api/events/", params={"society_id": society["society_id"]})
        assert resp.status_code == 200
        assert [e["title"] for e in resp.json()] == ["Ours"]


class TestEventUpdate:

    def test_organizer_updates_event(self, client):
        organizer, _, society = _setup(client)
        event = create_test_event(client, society["society_id"], organizer["user_id"])
        resp = client.patch(
            f"/api/events/{event['event_id']}",
            params={"actor_user_id": organizer["user_id"]},
            json={"title": "Renamed", "location": "Main Hall"},
        )
        assert resp.status_code == 200
        assert resp.json()["title"] == "Renamed"
        assert resp.json()["location"] == "Main Hall"

    def test_member_cannot_update_event(self, client):
        organizer, member, society = _setup(client)
        event = create_test_event(client, society["society_id"], organizer["user_id"])
        resp = client.patch(
            f"/api/events/{event['event_id']}",
            params={"actor_user_id": member["user_id"]},
            json={"title": "Hijacked"},
        )
        assert resp.status_code == 403

    def test_required_field_cannot_be_cleared(self, client):
        organizer, _, society = _setup(client)
        event = create_test_event(client, society["society_id"], organizer["user_id"])
        resp = client.patch(
            f"/api/events/{event['event_id']}",
            params={"actor_user_id": organizer["user_id"]},
            json={"title": None},
        )
        assert resp.status_code == 400


class TestEventService:
    """Service-level checks that need direct access to the store."""

    def test_moderator_can_create(self, db, store, society):
        moderator = make_user(db, name="Moderator")
        add_member(db, society, moderator, role=MemberRole.moderator)
        event = event_service.create_event(
            store, society.society_id, moderator.user_id,
            title="Quiz", start_time=datetime.now(timezone.utc) + timedelta(days=2),
        )
        assert event.event_code

    def test_pending_admin_is_not_an_organizer(self, db, store, society):
        pending = make_user(db, name="Pending")
        add_member(db, society, pending, role=MemberRole.admin, status=MemberStatus.pending)
        with pytest.raises(UnauthorizedError):
            event_service.create_event(
                store, society.society_id, pending.user_id,
                title="Too Early", start_time=datetime.now(timezone.utc) + timedelta(days=2),
            )

    def test_update_unknown_event(self, store, organizer):
        with pytest.raises(NotFoundError):
            event_service.update_event(store, "missing", organizer.user_id, {"title": "x"})

    def test_shrinking_capacity_below_one_rejected(self, db, store, society, organizer):
        event = make_event(db, society, organizer, capacity=5)
        with pytest.raises(ValidationError):
            event_service.update_event(store, event.event_id, organizer.user_id, {"capacity": 0})

    def test_raising_capacity_promotes_waitlist(self, db, store, society, organizer):
        event = make_event(db, society, organizer, capacity=1)
        first, second, third = (make_user(db, name=n) for n in ("First", "Second", "Third"))
        for user in (first, second, third):
            rsvp_service.submit_rsvp(store, event.event_id, user.user_id)

        event_service.update_event(store, event.event_id, organizer.user_id, {"capacity": 2})

        assert store.get_rsvp(event.event_id, second.user_id).status == RSVPStatus.going
        assert store.get_rsvp(event.event_id, third.user_id).status == RSVPStatus.waitlist

    def test_clearing_capacity_keeps_waitlist(self, db, store, society, organizer):
        event = make_event(db, society, organizer, capacity=1)
        first, second = make_user(db, name="First"), make_user(db, name="Second")
        rsvp_service.submit_rsvp(store, event.event_id, first.user_id)
        rsvp_service.submit_rsvp(store, event.event_id, second.user_id)

        event_service.update_event(store, event.event_id, organizer.user_id, {"capacity": None})

        assert store.get_rsvp(event.event_id, second.user_id).status == RSVPStatus.waitlist

    def test_recapping_unlimited_event_promotes_waitlist(self, db, store, society, organizer):
        event = make_event(db, society, organizer, capacity=1)
        first, second = make_user(db, name="First"), make_user(db, name="Second")
        rsvp_service.submit_rsvp(store, event.event_id, first.user_id)
        rsvp_service.submit_rsvp(store, event.event_id, second.user_id)

        event_service.update_event(store, event.event_id, organizer.user_id, {"capacity": None})
        event_service.update_event(store, event.event_id, organizer.user_id, {"capacity": 5})

        assert store.get_rsvp(event.event_id, second.user_id).status == RSVPStatus.going
        counts = rsvp_service.get_rsvp_counts(store, event.event_id)
        assert counts.going == 2
        assert counts.waitlist == 0
