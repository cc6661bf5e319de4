import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from core.config import AI_UNAVAILABLE_MESSAGE, DB_PATH
from models.events import Category

ADMIN_PASSPHRASE = "test-passphrase"


def fix_ac_payload():
    return {
        "title": "Fix AC",
        "date": "2025-03-10",
        "category": "Maintenance",
        "floor": 3,
        "room": "Offices",
        "description": "Warm air in the east offices",
        "submitted_by": "Guest at front desk",
    }


# =============================================================================
# HEALTH / SESSION
# =============================================================================


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["event_count"] > 100
    assert body["assistant_configured"] is False


def test_login_and_role(client):
    assert client.get("/v1/session").json()["role"] == "viewer"

    response = client.post("/v1/session/login", json={"passphrase": ADMIN_PASSPHRASE})
    token = response.json()["token"]

    assert response.json()["role"] == "admin"
    assert client.get("/v1/session", headers={"X-Session-Token": token}).json()["role"] == "admin"


def test_login_wrong_passphrase(client):
    response = client.post("/v1/session/login", json={"passphrase": "nope"})

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "UNAUTHORIZED"


def test_logout(client, admin_headers):
    assert client.post("/v1/session/logout", headers=admin_headers).status_code == 200
    assert client.get("/v1/requests", headers=admin_headers).status_code == 401


# =============================================================================
# CALENDAR
# =============================================================================


def test_calendar_month_grid(client):
    response = client.get("/v1/calendar", params={"month": "2025-01"})

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "January 2025"
    assert body["previous_month"] == "2024-12"
    assert body["next_month"] == "2025-02"
    assert len(body["cells"]) % 7 == 0
    assert body["cells"][0]["date"] == "2024-12-29"

    jan_15 = next(c for c in body["cells"] if c["date"] == "2025-01-15")
    assert "Backflow Inspection" in [e["title"] for e in jan_15["events"]]
    assert jan_15["in_month"] is True


def test_calendar_truncates_busy_days(client, seeded_store, admin_headers):
    for i in range(5):
        client.post(
            "/v1/events",
            headers=admin_headers,
            json={
                "title": f"Move-in {i}",
                "start": f"2025-02-18T{10 + i}:00:00",
                "end": f"2025-02-18T{11 + i}:00:00",
                "category": "Event",
                "floor": 4,
                "room": "Suite 400",
            },
        )

    calendar = client.get("/v1/calendar", params={"month": "2025-02", "floor": 4}).json()
    cell = next(c for c in calendar["cells"] if c["date"] == "2025-02-18")
    assert len(cell["events"]) == 4
    assert cell["more_count"] == 1

    day = client.get("/v1/calendar/day/2025-02-18", params={"floor": 4}).json()
    assert len(day["events"]) == 5


def test_calendar_filters(client):
    body = client.get(
        "/v1/calendar",
        params={"month": "2025-07", "show_maintenance": "false", "show_cleaning": "false"},
    ).json()

    categories = {e["category"] for c in body["cells"] for e in c["events"]}
    assert categories == {"Event"}


def test_calendar_invalid_month(client):
    response = client.get("/v1/calendar", params={"month": "July"})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_REQUEST"


@pytest.mark.parametrize("path", ["/v1/calendar", "/v1/calendar/export"])
@pytest.mark.parametrize("month", ["0001-01", "9999-12"])
def test_calendar_month_outside_date_range(client, path, month):
    response = client.get(path, params={"month": month})

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "INVALID_REQUEST"


def test_calendar_invalid_floor(client):
    assert client.get("/v1/calendar", params={"floor": 7}).status_code == 422


def test_export_calendar(client):
    response = client.get("/v1/calendar/export", params={"month": "2025-03"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "facility_schedule_2025_03.xlsx" in response.headers["content-disposition"]


# =============================================================================
# EVENTS
# =============================================================================


def test_list_events_by_floor(client):
    events = client.get("/v1/events", params={"floor": 6}).json()

    assert events
    assert all(e["floor"] == 6 for e in events)


def test_event_edits_require_admin(client, seeded_store):
    event_id = seeded_store.list_events()[0].id

    assert client.put(f"/v1/events/{event_id}", json={"room": "Lobby"}).status_code == 401
    assert client.delete(f"/v1/events/{event_id}", params={"confirm": "true"}).status_code == 401


def test_update_event(client, seeded_store, admin_headers):
    event_id = seeded_store.list_events()[0].id

    response = client.put(
        f"/v1/events/{event_id}",
        headers=admin_headers,
        json={"room": "Boiler Room", "category": "Cleaning"},
    )

    assert response.status_code == 200
    assert response.json()["room"] == "Boiler Room"
    assert seeded_store.get_event(event_id).category == Category.CLEANING


def test_create_event_with_utc_offset(client, seeded_store, admin_headers):
    response = client.post(
        "/v1/events",
        headers=admin_headers,
        json={
            "title": "Roof Drain Check",
            "start": "2025-03-12T09:00:00Z",
            "end": "2025-03-12T10:30:00+00:00",
            "category": "Maintenance",
            "floor": 6,
            "room": "Roof",
        },
    )

    assert response.status_code == 201
    event = seeded_store.get_event(response.json()["id"])
    assert event.start.tzinfo is None
    assert event.start == datetime(2025, 3, 12, 9, tzinfo=timezone.utc).astimezone().replace(tzinfo=None)
    assert event.end - event.start == timedelta(minutes=90)

    export = client.get("/v1/calendar/export", params={"month": "2025-03"})
    assert export.status_code == 200
    assert client.get("/v1/calendar", params={"month": "2025-03"}).status_code == 200


def test_update_event_with_utc_offset(client, seeded_store, admin_headers):
    event = seeded_store.list_events()[0]
    start = event.start.replace(tzinfo=timezone.utc)

    response = client.put(
        f"/v1/events/{event.id}",
        headers=admin_headers,
        json={"start": start.isoformat(), "end": (start + timedelta(hours=1)).isoformat()},
    )

    assert response.status_code == 200
    updated = seeded_store.get_event(event.id)
    assert updated.start.tzinfo is None
    assert updated.start == start.astimezone().replace(tzinfo=None)


def test_update_event_end_before_start(client, seeded_store, admin_headers):
    event = seeded_store.list_events()[0]

    response = client.put(
        f"/v1/events/{event.id}",
        headers=admin_headers,
        json={"end": datetime(event.start.year, 1, 1).isoformat()},
    )

    assert response.status_code == 422
    assert response.json()["detail"]["code"] == "VALIDATION_ERROR"


def test_delete_requires_confirmation(client, seeded_store, admin_headers):
    event_id = seeded_store.list_events()[0].id
    count = len(seeded_store.list_events())

    response = client.delete(f"/v1/events/{event_id}", headers=admin_headers)
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "CONFIRMATION_REQUIRED"
    assert len(seeded_store.list_events()) == count

    response = client.delete(f"/v1/events/{event_id}", headers=admin_headers, params={"confirm": "true"})
    assert response.status_code == 200
    assert len(seeded_store.list_events()) == count - 1
    assert client.get(f"/v1/events/{event_id}").status_code == 404


def test_get_unknown_event(client):
    response = client.get("/v1/events/does-not-exist")

    assert response.status_code == 404
    assert response.json()["detail"]["code"] == "NOT_FOUND"


# =============================================================================
# REQUEST LIFECYCLE
# =============================================================================


def test_submit_and_approve_request(client, seeded_store, admin_headers):
    submitted = client.post("/v1/requests", json=fix_ac_payload())
    assert submitted.status_code == 201
    request_id = submitted.json()["id"]
    assert submitted.json()["status"] == "pending"

    inbox = client.get("/v1/requests", headers=admin_headers).json()
    assert [r["id"] for r in inbox] == [request_id]

    approved = client.post(f"/v1/requests/{request_id}/approve", headers=admin_headers)
    assert approved.status_code == 200
    event = approved.json()
    assert event["id"] == request_id
    assert event["floor"] == 3
    assert event["room"] == "Offices"
    assert event["category"] == "Maintenance"
    assert event["start"].startswith("2025-03-10")

    assert client.get("/v1/requests", headers=admin_headers).json() == []
    assert [e.id for e in seeded_store.list_events()].count(request_id) == 1

    again = client.post(f"/v1/requests/{request_id}/approve", headers=admin_headers)
    assert again.status_code == 404


def test_inbox_is_most_recent_first(client, admin_headers):
    first = client.post("/v1/requests", json=fix_ac_payload()).json()["id"]
    second = client.post("/v1/requests", json=fix_ac_payload() | {"title": "Spill in gym"}).json()["id"]

    inbox = client.get("/v1/requests", headers=admin_headers).json()
    assert [r["id"] for r in inbox] == [second, first]


def test_inbox_requires_admin(client):
    assert client.get("/v1/requests").status_code == 401


def test_reject_request(client, seeded_store, admin_headers):
    request_id = client.post("/v1/requests", json=fix_ac_payload()).json()["id"]
    count = len(seeded_store.list_events())

    declined = client.post(f"/v1/requests/{request_id}/reject", headers=admin_headers)
    assert declined.status_code == 409
    assert len(seeded_store.pending_requests()) == 1

    rejected = client.post(
        f"/v1/requests/{request_id}/reject", headers=admin_headers, params={"confirm": "true"}
    )
    assert rejected.status_code == 200
    assert rejected.json()["status"] == "rejected"
    assert seeded_store.pending_requests() == []
    assert len(seeded_store.list_events()) == count


@pytest.mark.parametrize(
    "change",
    [{"floor": 0}, {"floor": 7}, {"category": "Parking"}, {"title": ""}, {"date": "tomorrow"}],
)
def test_submit_invalid_request(client, change):
    response = client.post("/v1/requests", json=fix_ac_payload() | change)
    assert response.status_code == 422


# =============================================================================
# ASSISTANT
# =============================================================================


def test_assistant_unavailable_without_key(client, admin_headers):
    response = client.post("/v1/assistant/query", headers=admin_headers, json={"query": "What's on floor 3?"})

    assert response.status_code == 200
    assert response.json() == {"answer": AI_UNAVAILABLE_MESSAGE, "status": "unavailable"}


def test_assistant_requires_admin(client):
    response = client.post("/v1/assistant/query", json={"query": "Anything?"})
    assert response.status_code == 401


def test_assistant_busy_while_query_in_flight(client, admin_headers):
    from api.dependencies import get_assistant_gate
    from services.assistant import AssistantGate

    gate = AssistantGate()
    client.app.dependency_overrides[get_assistant_gate] = lambda: gate

    with gate.hold(admin_headers["X-Session-Token"]):
        response = client.post("/v1/assistant/query", headers=admin_headers, json={"query": "Anything?"})

    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "ASSISTANT_BUSY"


def test_assistant_answer(client, admin_headers, monkeypatch):
    from api.routes import assistant as assistant_routes
    from services.assistant import AssistantReply

    seen = {}

    def fake_query(events, query, api_key, model_name):
        seen["count"] = len(events)
        return AssistantReply(text="Two inspections this week.", status="ok")

    monkeypatch.setattr(assistant_routes, "query_schedule_assistant", fake_query)

    response = client.post("/v1/assistant/query", headers=admin_headers, json={"query": "This week?"})

    assert response.json() == {"answer": "Two inspections this week.", "status": "ok"}
    assert seen["count"] > 100


# =============================================================================
# REQUEST LOG
# =============================================================================


def test_requests_are_logged(client):
    client.get("/v1/events/missing-event", headers={"X-Forwarded-For": "10.1.2.3, 10.0.0.1"})

    conn = sqlite3.connect(DB_PATH)
    try:
        row = conn.execute(
            """
            SELECT endpoint, method, client_ip, status_code, error_code
            FROM api_requests
            WHERE endpoint = '/v1/events/missing-event'
            ORDER BY id DESC LIMIT 1
            """
        ).fetchone()
    finally:
        conn.close()

    assert row == ("/v1/events/missing-event", "GET", "10.1.2.3", 404, "NOT_FOUND")
