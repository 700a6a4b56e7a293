from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

import pytest

_FEEDBACK = {
    "name": "Juan Dela Cruz",
    "email": "juan@example.com",
    "category": "suggestion",
    "message": "Please extend the library hours during finals week.",
}


def test_health(client) -> None:
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["database"] == "supabase"


# ------------------------------------------------------------------
# Feedback
# ------------------------------------------------------------------


def test_submit_and_track_feedback(client, supabase_client) -> None:
    response = client.post("/api/feedback", json=_FEEDBACK)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    record = body["data"]
    assert re.match(r"^TNG-\d{8}-\d{6}$", record["reference_number"])
    assert record["anonymous"] is False

    tracked = client.get(f"/api/feedback/track/{record['reference_number']}")
    assert tracked.status_code == 200
    assert tracked.json()["data"]["id"] == record["id"]


def test_track_unknown_reference(client) -> None:
    response = client.get("/api/feedback/track/TNG-19990101-000000")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Feedback not found"


def test_feedback_submission_is_rate_limited(client) -> None:
    statuses = [client.post("/api/feedback", json=_FEEDBACK).status_code for _ in range(6)]
    assert statuses == [201] * 5 + [429]

    rejected = client.post("/api/feedback", json=_FEEDBACK)
    assert rejected.json() == {
        "success": False,
        "error": "Too many submissions. Please wait before submitting again.",
    }
    assert int(rejected.headers["Retry-After"]) > 0
    assert rejected.headers["RateLimit-Limit"] == "5"


def test_admin_updates_feedback_status(client, admin_headers) -> None:
    created = client.post("/api/feedback", json=_FEEDBACK).json()["data"]

    response = client.put(
        f"/api/feedback/{created['id']}",
        json={"status": "resolved", "admin_response": "Done, thanks!"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "resolved"


# ------------------------------------------------------------------
# CRUD semantics shared by every entity router
# ------------------------------------------------------------------


def test_update_of_missing_id_is_404(client, admin_headers) -> None:
    response = client.put("/api/officers/999", json={"name": "Nobody"}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_delete_is_idempotent(client, admin_headers, supabase_client) -> None:
    supabase_client.tables["committees"] = [{"id": 1, "name": "Finance", "is_active": True}]

    first = client.delete("/api/committees/1", headers=admin_headers)
    second = client.delete("/api/committees/1", headers=admin_headers)

    assert first.status_code == second.status_code == 200
    assert second.json()["success"] is True
    assert supabase_client.tables["committees"] == []


def test_create_officer(client, admin_headers) -> None:
    response = client.post(
        "/api/officers",
        json={"name": "Ana Reyes", "position": "President", "branch": "executive", "is_active": True},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["position"] == "President"

    listed = client.get("/api/officers", params={"branch": "executive"}).json()["data"]
    assert [o["name"] for o in listed] == ["Ana Reyes"]


# ------------------------------------------------------------------
# Announcements
# ------------------------------------------------------------------


@pytest.fixture
def announcements(supabase_client) -> None:
    supabase_client.tables["announcements"] = [
        {"id": 1, "title": "Fair", "category": "Event", "status": "published", "created_at": "2024-02-01"},
        {"id": 2, "title": "Draft", "category": "Event", "status": "draft", "created_at": "2024-02-02"},
    ]


def test_public_sees_only_published(client, announcements) -> None:
    data = client.get("/api/announcements").json()["data"]
    assert [a["id"] for a in data] == [1]


def test_admin_can_include_drafts(client, admin_headers, announcements) -> None:
    data = client.get("/api/announcements", params={"all": "true"}, headers=admin_headers).json()["data"]
    assert [a["id"] for a in data] == [2, 1]


def test_drafts_need_admin(client, student_headers, announcements) -> None:
    assert client.get("/api/announcements", params={"all": "true"}).status_code == 401
    response = client.get("/api/announcements", params={"all": "true"}, headers=student_headers)
    assert response.status_code == 403


def test_new_announcement_defaults_to_draft(client, admin_headers) -> None:
    response = client.post(
        "/api/announcements",
        json={"title": "General Assembly", "content": "Join us at the gym on Friday.", "category": "Event"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "draft"


# ------------------------------------------------------------------
# Content upsert
# ------------------------------------------------------------------


def test_site_content_upsert(client, admin_headers, supabase_client) -> None:
    created = client.post(
        "/api/site-content",
        json={"section_type": "hero", "title": "Welcome", "display_order": 1, "active": True},
        headers=admin_headers,
    )
    assert created.status_code == 201
    row_id = created.json()["data"]["id"]

    updated = client.post(
        "/api/site-content",
        json={"id": row_id, "title": "Welcome back"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["title"] == "Welcome back"
    assert len(supabase_client.tables["site_content"]) == 1

    listed = client.get("/api/site-content", params={"section": "hero"}).json()["data"]
    assert [r["title"] for r in listed] == ["Welcome back"]


def test_upsert_with_unknown_id_is_404(client, admin_headers, supabase_client) -> None:
    response = client.post(
        "/api/page-content",
        json={"id": 77, "title": "Ghost"},
        headers=admin_headers,
    )
    assert response.status_code == 404
    assert supabase_client.tables.get("page_content", []) == []


def test_page_content_slug_lookup(client, supabase_client) -> None:
    supabase_client.tables["page_content"] = [
        {"id": 1, "page": "about", "section_key": "mission", "title": "Mission", "active": True}
    ]
    assert client.get("/api/page-content/mission").json()["data"]["title"] == "Mission"
    assert client.get("/api/page-content/vision").status_code == 404


# ------------------------------------------------------------------
# Transparency
# ------------------------------------------------------------------


@pytest.fixture
def transactions(supabase_client) -> None:
    supabase_client.tables["financial_transactions"] = [
        {"id": 1, "description": "Sound system rental", "category": "events", "amount": 3000, "created_at": "2024-01-01"},
        {"id": 2, "description": "Bond paper", "category": "office", "amount": -500, "created_at": "2024-01-02"},
    ]


def test_transactions_list_and_search(client, transactions) -> None:
    recent = client.get("/api/financial-transactions", params={"limit": 1}).json()["data"]
    assert [t["id"] for t in recent] == [2]

    found = client.get("/api/financial-transactions", params={"search": "OFFICE"}).json()["data"]
    assert [t["id"] for t in found] == [2]


def test_single_transaction_is_admin_only(client, admin_headers, transactions) -> None:
    assert client.get("/api/financial-transactions/1").status_code == 401
    assert client.get("/api/financial-transactions/1", headers=admin_headers).json()["data"]["amount"] == 3000


def test_create_transaction_rejects_non_positive_amount(client, admin_headers) -> None:
    response = client.post(
        "/api/financial-transactions",
        json={
            "description": "Refund",
            "amount": 0,
            "transaction_type": "expense",
            "transaction_date": "2024-03-01T00:00:00Z",
        },
        headers=admin_headers,
    )
    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "amount"


def test_issuances_default_limit(client, supabase_client) -> None:
    supabase_client.tables["issuances"] = [
        {"id": i, "status": "active", "created_at": f"2024-01-{i:02d}"} for i in range(1, 13)
    ]
    data = client.get("/api/issuances").json()["data"]
    assert len(data) == 10
    assert data[0]["id"] == 12


# ------------------------------------------------------------------
# Stats and notifications
# ------------------------------------------------------------------


def test_automated_stats_endpoint(client, supabase_client) -> None:
    supabase_client.tables["announcements"] = [
        {"id": 1, "category": "Event", "status": "published"},
        {"id": 2, "category": "Accomplishment", "status": "published"},
    ]
    supabase_client.tables["financial_transactions"] = [{"id": 1, "amount": 1500}]
    supabase_client.tables["organizations"] = [{"id": 1, "is_active": True}]

    response = client.get("/api/stats/automated")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "data": {
            "eventsCount": 1,
            "accomplishmentsCount": 1,
            "totalBudget": 1500.0,
            "organizationsCount": 1,
        },
    }


def test_notifications_default_to_last_day(client, admin_headers, supabase_client) -> None:
    now = datetime.now(timezone.utc)
    supabase_client.tables["feedback"] = [
        {"id": 1, "created_at": (now - timedelta(hours=30)).isoformat()},
        {"id": 2, "created_at": (now - timedelta(hours=2)).isoformat()},
    ]

    data = client.get("/api/notifications", headers=admin_headers).json()["data"]
    assert [f["id"] for f in data] == [2]

    since = (now - timedelta(days=2)).isoformat()
    data = client.get("/api/notifications", params={"since": since}, headers=admin_headers).json()["data"]
    assert {f["id"] for f in data} == {1, 2}
