"""End-to-end flows through the HTTP API.

Covers:
- RSVP, waitlist and promotion via the RSVP routes
- Domain errors rendered as {"detail", "error"}
- Ticket and QR check-in round trip
- Reminder routes
"""
from datetime import datetime, timedelta, timezone

from tests.conftest import create_test_event, create_test_society, create_test_user


def _setup(client, **event_overrides):
    organizer = create_test_user(client, name="Organizer")
    society = create_test_society(client, creator_id=organizer["user_id"])
    event = create_test_event(client, society["society_id"], organizer["user_id"], **event_overrides)
    return organizer, society, event


class TestRSVPRoutes:

    def test_cancel_promotes_waitlisted_user(self, client):
        _, _, event = _setup(client, capacity=1)
        eid = event["event_id"]
        a = create_test_user(client, name="A")
        b = create_test_user(client, name="B")

        resp = client.post(f"/api/events/{eid}/rsvp", json={"user_id": a["user_id"], "status": "going"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "status": "going"}

        resp = client.post(f"/api/events/{eid}/rsvp", json={"user_id": b["user_id"], "status": "going"})
        assert resp.json()["status"] == "waitlist"

        resp = client.delete(f"/api/events/{eid}/rsvp", params={"user_id": a["user_id"]})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "promoted_user_ids": [b["user_id"]]}

        resp = client.get(f"/api/events/{eid}/rsvp", params={"user_id": b["user_id"]})
        assert resp.json()["status"] == "going"

    def test_counts(self, client):
        _, _, event = _setup(client, capacity=1)
        eid = event["event_id"]
        for name in ("A", "B"):
            user = create_test_user(client, name=name)
            client.post(f"/api/events/{eid}/rsvp", json={"user_id": user["user_id"]})

        resp = client.get(f"/api/events/{eid}/rsvp-counts")
        assert resp.json() == {"going": 1, "maybe": 0, "waitlist": 1, "total_guests": 0}

    def test_no_rsvp_returns_null(self, client):
        _, _, event = _setup(client)
        user = create_test_user(client)
        resp = client.get(f"/api/events/{event['event_id']}/rsvp", params={"user_id": user["user_id"]})
        assert resp.status_code == 200
        assert resp.json() is None

    def test_deadline_error_body(self, client):
        deadline = datetime.now(timezone.utc) - timedelta(hours=1)
        _, _, event = _setup(client, rsvp_deadline=deadline.isoformat())
        user = create_test_user(client)

        resp = client.post(f"/api/events/{event['event_id']}/rsvp", json={"user_id": user["user_id"]})

        assert resp.status_code == 400
        assert resp.json() == {"detail": "RSVP deadline has passed", "error": "deadline_expired"}

    def test_unknown_event(self, client):
        user = create_test_user(client)
        resp = client.post("/api/events/missing/rsvp", json={"user_id": user["user_id"]})
        assert resp.status_code == 404
        assert resp.json()["error"] == "not_found"

    def test_attendees_and_removal(self, client):
        organizer, _, event = _setup(client, capacity=1)
        eid = event["event_id"]
        a = create_test_user(client, name="A")
        b = create_test_user(client, name="B")
        client.post(f"/api/events/{eid}/rsvp", json={"user_id": a["user_id"]})
        client.post(f"/api/events/{eid}/rsvp", json={"user_id": b["user_id"]})

        waitlist = client.get(f"/api/events/{eid}/attendees", params={"status": "waitlist"}).json()
        assert [r["user_id"] for r in waitlist] == [b["user_id"]]

        resp = client.delete(f"/api/events/{eid}/attendees/{a['user_id']}",
                             params={"actor_user_id": organizer["user_id"]})
        assert resp.status_code == 200
        assert resp.json()["promoted_user_ids"] == [b["user_id"]]

        attendees = client.get(f"/api/events/{eid}/attendees").json()
        assert [(r["user_id"], r["status"], r["checked_in"]) for r in attendees] == [
            (b["user_id"], "going", False),
        ]

    def test_member_cannot_promote_waitlist(self, client):
        _, _, event = _setup(client, capacity=1)
        stranger = create_test_user(client)
        resp = client.post(f"/api/events/{event['event_id']}/waitlist/promote",
                           params={"actor_user_id": stranger["user_id"]})
        assert resp.status_code == 403


class TestCheckInRoutes:

    def test_ticket_to_qr_check_in(self, client):
        organizer, _, event = _setup(client, title="Winter Ball")
        eid = event["event_id"]
        guest = create_test_user(client, name="Guest")
        client.post(f"/api/events/{eid}/rsvp", json={"user_id": guest["user_id"]})

        ticket = client.get(f"/api/events/{eid}/ticket", params={"user_id": guest["user_id"]}).json()
        assert ticket["event_title"] == "Winter Ball"
        assert ticket["qr_data"] == f"{event['event_code']}:{guest['user_id']}"

        resp = client.post("/api/checkins/qr", json={
            "payload": ticket["qr_data"],
            "actor_user_id": organizer["user_id"],
        })
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["user"]["user_id"] == guest["user_id"]
        assert body["event"] == {"event_id": eid, "title": "Winter Ball"}

        checkins = client.get(f"/api/events/{eid}/checkins").json()
        assert [(c["user_id"], c["check_in_method"]) for c in checkins] == [(guest["user_id"], "qr")]

        again = client.post("/api/checkins/qr", json={
            "payload": ticket["qr_data"],
            "actor_user_id": organizer["user_id"],
        })
        assert again.status_code == 409
        assert again.json()["error"] == "duplicate_check_in"

    def test_malformed_qr(self, client):
        organizer, _, _ = _setup(client)
        resp = client.post("/api/checkins/qr", json={
            "payload": "not-a-ticket",
            "actor_user_id": organizer["user_id"],
        })
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Malformed QR code", "error": "invalid_code"}

    def test_manual_check_in_and_undo(self, client):
        organizer, _, event = _setup(client)
        eid = event["event_id"]
        walk_in = create_test_user(client, name="Walk In")

        resp = client.post(f"/api/events/{eid}/checkins", json={
            "user_id": walk_in["user_id"],
            "actor_user_id": organizer["user_id"],
            "guest_count": 2,
        })
        assert resp.status_code == 201
        assert resp.json()["rsvp_id"] is None
        assert resp.json()["check_in_method"] == "manual"

        params = {"actor_user_id": organizer["user_id"]}
        resp = client.delete(f"/api/events/{eid}/checkins/{walk_in['user_id']}", params=params)
        assert resp.json() == {"success": True, "removed": True}

        resp = client.delete(f"/api/events/{eid}/checkins/{walk_in['user_id']}", params=params)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "removed": False}

    def test_self_check_in_for_other_user_forbidden(self, client):
        _, _, event = _setup(client)
        a = create_test_user(client, name="A")
        b = create_test_user(client, name="B")
        resp = client.post(f"/api/events/{event['event_id']}/checkins", json={
            "user_id": b["user_id"],
            "actor_user_id": a["user_id"],
            "method": "self",
        })
        assert resp.status_code == 403


class TestReminderRoutes:

    def test_set_list_and_remove(self, client):
        _, _, event = _setup(client)
        eid = event["event_id"]
        user = create_test_user(client)

        resp = client.put(f"/api/events/{eid}/reminders", json={
            "user_id": user["user_id"],
            "reminder_type": "1h",
        })
        assert resp.status_code == 200
        assert resp.json()["reminder_type"] == "1h"

        listed = client.get(f"/api/events/{eid}/reminders", params={"user_id": user["user_id"]}).json()
        assert [r["reminder_type"] for r in listed] == ["1h"]

        resp = client.delete(f"/api/events/{eid}/reminders/1h", params={"user_id": user["user_id"]})
        assert resp.status_code == 204
        assert client.get(f"/api/events/{eid}/reminders", params={"user_id": user["user_id"]}).json() == []

    def test_custom_without_time(self, client):
        _, _, event = _setup(client)
        user = create_test_user(client)
        resp = client.put(f"/api/events/{event['event_id']}/reminders", json={
            "user_id": user["user_id"],
            "reminder_type": "custom",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Custom time required"

    def test_health(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}
