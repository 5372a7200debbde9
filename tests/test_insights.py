"""Insights aggregates and their cache."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import fakeredis
import pytest
from fastapi.testclient import TestClient

from app.services.analytics import AnalyticsService
from app.utils.cache import CacheBackend


def test_insights_without_data(client: TestClient, auth_headers) -> None:
    response = client.get("/api/v1/insights", headers=auth_headers("empty"))

    assert response.status_code == 200
    body = response.json()
    assert body["has_data"] is False
    assert body["totals"] == {
        "total_analyses": 0,
        "total_reviews": 0,
        "avg_score": None,
        "best_score": None,
        "worst_score": None,
    }
    assert body["sentiment"] == {"positive": 0, "neutral": 0, "negative": 0}
    assert body["buckets"] == {"low_1_3": 0, "mid_4_6": 0, "good_7_8": 0, "great_9_10": 0}
    assert body["top_sources"] == []
    assert body["top_products"] == []
    assert body["trend_14d"] == []


def test_insights_aggregates(client: TestClient, auth_headers, make_user, make_analysis) -> None:
    make_user("analyst")
    now = datetime.now(timezone.utc)
    make_analysis("analyst", product_name="Kettle", source="amazon", review_count=10,
                  reviews_text="excellent amazing love perfect", created_at=now - timedelta(days=1))
    make_analysis("analyst", product_name="Kettle", source="amazon", review_count=5,
                  reviews_text="bad poor broken refund", created_at=now - timedelta(days=1))
    make_analysis("analyst", product_name="Lamp", source="walmart", review_count=3,
                  reviews_text="excellent amazing love", created_at=now)
    make_analysis("analyst", product_name="Radio", source="manual",
                  reviews_text="arrived on time and works", created_at=now - timedelta(days=30))

    response = client.get("/api/v1/insights", headers=auth_headers("analyst"))

    assert response.status_code == 200
    body = response.json()
    assert body["has_data"] is True
    assert body["totals"] == {
        "total_analyses": 4,
        "total_reviews": 18,
        "avg_score": 5.75,
        "best_score": 9,
        "worst_score": 1,
    }
    assert body["sentiment"] == {"positive": 2, "neutral": 1, "negative": 1}
    assert body["buckets"] == {"low_1_3": 1, "mid_4_6": 1, "good_7_8": 1, "great_9_10": 1}
    assert body["top_sources"][0] == {"source": "amazon", "count": 2, "avg_score": 5.0}
    assert [row["source"] for row in body["top_sources"]] == ["amazon", "manual", "walmart"]
    assert body["top_products"][0] == {"product_name": "Kettle", "count": 2, "avg_score": 5.0}
    assert [row["product_name"] for row in body["top_products"]] == ["Kettle", "Lamp", "Radio"]

    # one point per day with rows, oldest first; empty days and the 30-day-old row are absent
    assert body["trend_14d"] == [
        {"day": (now - timedelta(days=1)).date().isoformat(), "count": 2, "avg_score": 5.0},
        {"day": now.date().isoformat(), "count": 1, "avg_score": 8.0},
    ]


def test_insights_cache_is_invalidated_on_submit(client: TestClient, auth_headers) -> None:
    headers = auth_headers("cached", email="cached@example.com")
    client.get("/api/v1/users/me", headers=headers)

    first = client.get("/api/v1/insights", headers=headers).json()
    client.post(
        "/api/v1/analysis",
        json={"product_name": "Fan", "reviews_text": "excellent amazing love this fan"},
        headers=headers,
    )
    second = client.get("/api/v1/insights", headers=headers).json()

    assert first["has_data"] is False
    assert second["has_data"] is True
    assert second["totals"]["total_analyses"] == 1


def test_insights_are_served_from_cache(db_session, make_user, make_analysis) -> None:
    make_user("repeat")
    make_analysis("repeat", product_name="Fan")
    service = AnalyticsService(db_session)

    first = service.get_insights(user_id="repeat")
    make_analysis("repeat", product_name="Heater")
    second = service.get_insights(user_id="repeat")

    assert second["totals"]["total_analyses"] == first["totals"]["total_analyses"] == 1


@pytest.mark.asyncio
async def test_insights_async_client(async_client, auth_headers, make_user, make_analysis) -> None:
    make_user("async_user")
    make_analysis("async_user", product_name="Speaker", reviews_text="good sound, great bass")

    response = await async_client.get("/api/v1/insights", headers=auth_headers("async_user"))

    assert response.status_code == 200
    assert response.json()["sentiment"]["positive"] == 1


def test_invalidation_reaches_every_worker_sharing_redis() -> None:
    shared = fakeredis.FakeServer()
    worker_a = CacheBackend(redis_client=fakeredis.FakeRedis(server=shared, decode_responses=True))
    worker_b = CacheBackend(redis_client=fakeredis.FakeRedis(server=shared, decode_responses=True))

    worker_b.set("insights", "u1", {"total": 1}, ttl_seconds=300)
    assert worker_a.get("insights", "u1") == {"total": 1}

    worker_a.invalidate("insights", "u1")

    assert worker_b.get("insights", "u1") is None
    assert worker_a.get("insights", "u1") is None


def test_local_store_takes_over_after_redis_failure() -> None:
    server = fakeredis.FakeServer()
    server.connected = False
    backend = CacheBackend(redis_client=fakeredis.FakeRedis(server=server, decode_responses=True))

    backend.set("insights", "u2", {"total": 2}, ttl_seconds=300)

    assert backend.get("insights", "u2") == {"total": 2}
    backend.invalidate("insights", "u2")
    assert backend.get("insights", "u2") is None
