"""Dashboard summary endpoint."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient


def test_dashboard_without_data(client: TestClient, auth_headers) -> None:
    response = client.get("/api/v1/dashboard/summary", headers=auth_headers("newcomer"))

    assert response.status_code == 200
    body = response.json()
    assert body["has_data"] is False
    assert body["stats"] is None
    assert body["recent"] == []
    assert body["updated_at"]


def test_dashboard_stats_and_recent(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    make_user("merchant")
    now = datetime.now(timezone.utc)
    make_analysis("merchant", product_name="Kettle", reviews_text="excellent amazing love it",
                  created_at=now - timedelta(days=2))
    make_analysis("merchant", product_name="Kettle", reviews_text="bad poor broken refund",
                  created_at=now - timedelta(days=1))
    latest = make_analysis("merchant", product_name="Toaster",
                           reviews_text="excellent amazing love perfect", created_at=now)
    make_user("rival")
    make_analysis("rival", product_name="Elsewhere", reviews_text="excellent amazing love")

    response = client.get(
        "/api/v1/dashboard/summary", params={"limit": 2}, headers=auth_headers("merchant")
    )

    assert response.status_code == 200
    body = response.json()
    assert body["has_data"] is True
    stats = body["stats"]
    assert stats["total_analyses"] == 3
    assert stats["avg_score"] == 6.0
    assert stats["best_score"] == 9
    assert stats["worst_score"] == 1
    assert stats["positive_rate"] == 66.67
    assert stats["active_products"] == 2
    assert stats["last_activity_at"] is not None
    assert [row["product_name"] for row in body["recent"]] == ["Toaster", "Kettle"]
    assert body["recent"][0]["id"] == str(latest.id)
    assert body["recent"][0]["score10"] == 9
    assert body["recent"][0]["sentiment"] == "positive"


def test_dashboard_since_filters_recent_only(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    make_user("poller")
    now = datetime.now(timezone.utc)
    make_analysis("poller", product_name="Old", created_at=now - timedelta(hours=5))
    make_analysis("poller", product_name="New", created_at=now - timedelta(minutes=5))

    response = client.get(
        "/api/v1/dashboard/summary",
        params={"since": (now - timedelta(hours=1)).isoformat()},
        headers=auth_headers("poller"),
    )
    garbage = client.get(
        "/api/v1/dashboard/summary", params={"since": "yesterday-ish"}, headers=auth_headers("poller")
    )

    assert [row["product_name"] for row in response.json()["recent"]] == ["New"]
    assert response.json()["stats"]["total_analyses"] == 2
    assert [row["product_name"] for row in garbage.json()["recent"]] == ["New", "Old"]


def test_dashboard_limit_bounds(client: TestClient, auth_headers) -> None:
    headers = auth_headers("merchant")

    assert client.get("/api/v1/dashboard/summary", params={"limit": 0}, headers=headers).status_code == 422
    assert client.get("/api/v1/dashboard/summary", params={"limit": 21}, headers=headers).status_code == 422


def test_dashboard_requires_authentication(client: TestClient) -> None:
    assert client.get("/api/v1/dashboard/summary").status_code == 401
