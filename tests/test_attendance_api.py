from datetime import date

import pytest

from workforce_attendance.models.attendance_daily_summary import AttendanceDailySummary
from workforce_attendance.models.attendance_event import AttendanceEvent
from workforce_attendance.models.attendance_record import AttendanceRecord
from workforce_attendance.models.audit_log import AuditLog
from tests.helpers import utc

BASE = "/api/v1/attendance"


@pytest.fixture
def admin(current_user):
    current_user.update({"user_id": 99, "role_level": 90})
    return current_user


def test_check_in_returns_201_and_open_summary(client, db):
    response = client.post(f"{BASE}/check-in", json={
        "latitude": -6.2,
        "longitude": 106.8,
        "accuracy": 12.5,
        "location_id": "HQ",
        "device_type": "DESKTOP",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["event"]["event_type"] == "CHECK_IN"
    summary = body["data"]["summary"]
    assert summary["status"] == "NEEDS_VERIFICATION"
    assert summary["sessions_count"] == 0
    assert summary["current_session_started_at"] is not None

    event = db.query(AttendanceEvent).one()
    assert event.ae_user_id == 1
    assert event.ae_device_type == "DESKTOP"
    assert event.ae_location_id == "HQ"


def test_check_in_without_body(client):
    response = client.post(f"{BASE}/check-in")

    assert response.status_code == 201
    assert response.json()["data"]["event"]["id"] >= 1


def test_check_out_closes_session(client):
    client.post(f"{BASE}/check-in")
    response = client.post(f"{BASE}/check-out")

    assert response.status_code == 200
    summary = response.json()["data"]["summary"]
    assert summary["sessions_count"] == 1
    assert summary["status"] == "PARTIAL"
    assert summary["current_session_started_at"] is None
    assert summary["hours_worked"] == "0m"


def test_repeated_check_ins_are_all_recorded(client, db):
    for _ in range(3):
        assert client.post(f"{BASE}/check-in").status_code == 201

    assert db.query(AttendanceEvent).count() == 3


def test_orphan_check_out_is_accepted(client):
    response = client.post(f"{BASE}/check-out")

    assert response.status_code == 200
    assert response.json()["data"]["summary"]["status"] == "ABSENT"


@pytest.mark.parametrize("payload", [
    {"latitude": 10.0},
    {"longitude": 10.0},
    {"latitude": 91.0, "longitude": 0.0},
    {"latitude": 0.0, "longitude": -181.0},
    {"latitude": 0.0, "longitude": 0.0, "accuracy": -1},
    {"accuracy": 5.0},
    {"device_type": "TABLET"},
])
def test_invalid_payload_is_rejected_without_storing(client, db, payload):
    response = client.post(f"{BASE}/check-in", json=payload)

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["details"]["errors"]
    assert db.query(AttendanceEvent).count() == 0


def test_daily_summary_of_empty_day_is_absent(client):
    response = client.get(f"{BASE}/daily-summary", params={"date": "2024-03-04"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["date"] == "2024-03-04"
    assert data["status"] == "ABSENT"
    assert data["total_work_minutes"] == 0
    assert data["total_worked_seconds"] == 0
    assert data["hours_worked"] == "0m"
    assert data["first_check_in"] is None


def test_daily_summary_recomputes_from_events(client, add_event):
    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))
    add_event(1, "CHECK_OUT", utc(2024, 3, 4, 16))

    data = client.get(f"{BASE}/daily-summary", params={"date": "2024-03-04"}).json()["data"]

    assert data["total_work_minutes"] == 420
    assert data["hours_worked"] == "7h"
    assert data["status"] == "PRESENT"


def test_invalid_date_is_bad_request(client):
    response = client.get(f"{BASE}/daily-summary", params={"date": "04-03-2024"})

    assert response.status_code == 400
    assert response.json()["success"] is False


def test_me_view(client, add_event):
    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))
    add_event(1, "CHECK_OUT", utc(2024, 3, 4, 11, 30))

    data = client.get(f"{BASE}/me", params={"date": "2024-03-04"}).json()["data"]

    assert data["date"] == "2024-03-04"
    assert data["total_work_minutes"] == 150
    assert data["hours_worked"] == "2h 30m"
    assert data["status"] == "PARTIAL"
    assert data["check_in_at"] is not None
    assert data["check_out_at"] is not None


def test_today_is_null_before_any_event(client):
    response = client.get(f"{BASE}/today")

    assert response.status_code == 200
    assert response.json()["data"]["attendance"] is None


def test_today_after_check_in(client):
    client.post(f"{BASE}/check-in")

    data = client.get(f"{BASE}/today").json()["data"]

    assert data["attendance"]["status"] == "NEEDS_VERIFICATION"


def test_my_events_newest_first(client, add_event):
    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))
    add_event(1, "CHECK_OUT", utc(2024, 3, 4, 10))
    add_event(2, "CHECK_IN", utc(2024, 3, 4, 9))

    body = client.get(f"{BASE}/events/me", params={"date": "2024-03-04", "limit": 1}).json()

    assert body["total"] == 2
    assert body["pages"] == 2
    assert [e["ae_event_type"] for e in body["data"]] == ["CHECK_OUT"]


@pytest.fixture
def two_users_summaries(db, add_event):
    from workforce_attendance.services.summary_aggregator import SummaryAggregator

    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))
    add_event(1, "CHECK_OUT", utc(2024, 3, 4, 12))
    add_event(2, "CHECK_IN", utc(2024, 3, 4, 8))
    add_event(2, "CHECK_OUT", utc(2024, 3, 4, 17))
    add_event(2, "CHECK_IN", utc(2024, 3, 5, 8))
    SummaryAggregator().rebuild(db, date(2024, 3, 1), date(2024, 3, 31))


def test_listing_is_scoped_to_self_for_regular_users(client, two_users_summaries):
    body = client.get(f"{BASE}/", params={"user_id": 2, "from": "2024-03-01", "to": "2024-03-31"}).json()

    assert body["total"] == 1
    assert [row["ads_user_id"] for row in body["data"]] == [1]


def test_listing_keeps_user_zero_to_own_summaries(client, current_user, two_users_summaries):
    current_user["user_id"] = 0

    body = client.get(f"{BASE}/", params={"user_id": 2, "from": "2024-03-01", "to": "2024-03-31"}).json()

    assert body["total"] == 0
    assert body["data"] == []


def test_listing_for_privileged_users(client, admin, two_users_summaries):
    everyone = client.get(f"{BASE}/", params={"from": "2024-03-01", "to": "2024-03-31"}).json()
    one_user = client.get(f"{BASE}/", params={"user_id": 2, "from": "2024-03-01", "to": "2024-03-31"}).json()

    assert everyone["total"] == 3
    assert one_user["total"] == 2
    assert [row["ads_date"] for row in one_user["data"]] == ["2024-03-05", "2024-03-04"]


def test_listing_pagination(client, admin, two_users_summaries):
    body = client.get(f"{BASE}/", params={"from": "2024-03-01", "to": "2024-03-31", "page": 2, "limit": 2}).json()

    assert body["total"] == 3
    assert body["page"] == 2
    assert body["pages"] == 2
    assert len(body["data"]) == 1


def test_listing_rejects_inverted_range(client):
    response = client.get(f"{BASE}/", params={"from": "2024-03-31", "to": "2024-03-01"})

    assert response.status_code == 400


def test_listing_limit_is_capped(client):
    response = client.get(f"{BASE}/", params={"limit": 101})

    assert response.status_code == 422


def test_listing_does_not_recompute(client, db, admin, add_event):
    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))

    body = client.get(f"{BASE}/", params={"from": "2024-03-01", "to": "2024-03-31"}).json()

    assert body["total"] == 0
    assert db.query(AttendanceDailySummary).count() == 0


@pytest.fixture
def legacy_record(db):
    record = AttendanceRecord(
        ar_user_id=1,
        ar_date=date(2024, 3, 4),
        ar_check_in_at=utc(2024, 3, 4, 9),
        ar_check_out_at=utc(2024, 3, 4, 17),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def test_override_updates_record_and_writes_audit(client, db, admin, legacy_record):
    response = client.post(f"{BASE}/{legacy_record.ar_id}/override", json={
        "check_in_at": "2024-03-04T08:30:00Z",
        "reason": "Badge reader outage",
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["ar_is_overridden"] is True
    assert data["ar_override_by"] == 99
    assert data["ar_override_reason"] == "Badge reader outage"

    db.expire_all()
    record = db.get(AttendanceRecord, legacy_record.ar_id)
    assert record.ar_check_in_at.hour == 8
    assert record.ar_check_in_at.minute == 30
    assert record.ar_check_out_at.hour == 17

    entry = db.query(AuditLog).one()
    assert entry.al_action == "ATTENDANCE_OVERRIDE"
    assert entry.al_entity_type == "attendance"
    assert entry.al_entity_id == str(legacy_record.ar_id)
    assert entry.al_actor_id == 99
    assert entry.al_payload["reason"] == "Badge reader outage"
    assert entry.al_payload["changes"]["check_out_at"] is None


def test_override_leaves_events_and_summaries_alone(client, db, admin, legacy_record):
    client.post(f"{BASE}/{legacy_record.ar_id}/override", json={"reason": "noop"})

    assert db.query(AttendanceEvent).count() == 0
    assert db.query(AttendanceDailySummary).count() == 0


def test_override_unknown_record(client, db, admin):
    response = client.post(f"{BASE}/12345/override", json={"reason": "typo"})

    assert response.status_code == 404
    assert db.query(AuditLog).count() == 0


def test_override_requires_reason(client, admin, legacy_record):
    response = client.post(f"{BASE}/{legacy_record.ar_id}/override", json={"reason": ""})

    assert response.status_code == 422


def test_override_requires_admin_role(client, legacy_record):
    response = client.post(f"{BASE}/{legacy_record.ar_id}/override", json={"reason": "mine"})

    assert response.status_code == 403


def test_rebuild_summaries(client, db, admin, add_event):
    add_event(1, "CHECK_IN", utc(2024, 3, 4, 9))
    add_event(1, "CHECK_OUT", utc(2024, 3, 4, 15))
    add_event(2, "CHECK_IN", utc(2024, 3, 6, 9))

    response = client.post(
        "/api/v1/maintenance/rebuild-summaries",
        params={"date_from": "2024-03-01", "date_to": "2024-03-31"}
    )

    assert response.status_code == 200
    assert response.json()["data"]["rebuilt_count"] == 2
    db.expire_all()
    summary = db.query(AttendanceDailySummary).filter_by(ads_user_id=1).one()
    assert summary.ads_status == "PRESENT"


def test_rebuild_requires_admin_role(client):
    response = client.post(
        "/api/v1/maintenance/rebuild-summaries",
        params={"date_from": "2024-03-01", "date_to": "2024-03-31"}
    )

    assert response.status_code == 403


def test_rebuild_rejects_inverted_range(client, admin):
    response = client.post(
        "/api/v1/maintenance/rebuild-summaries",
        params={"date_from": "2024-03-31", "date_to": "2024-03-01"}
    )

    assert response.status_code == 400
