"""History search, pagination and detail lookups."""
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from app.services.analysis import HistoryQuery

POSITIVE_TEXT = "excellent amazing love this blender"  # 8
NEGATIVE_TEXT = "bad poor broken, asked for a refund"  # 1
NEUTRAL_TEXT = "arrived on time and works as described"  # 5


def seed(make_user, make_analysis) -> datetime:
    make_user("historian")
    now = datetime.now(timezone.utc)
    make_analysis(
        "historian", product_name="Blender Pro", reviews_text=POSITIVE_TEXT,
        source="amazon", created_at=now - timedelta(days=3),
    )
    make_analysis(
        "historian", product_name="Cheap Toaster", reviews_text=NEGATIVE_TEXT,
        source="walmart", created_at=now - timedelta(days=2),
    )
    make_analysis(
        "historian", product_name="Desk Lamp", reviews_text=NEUTRAL_TEXT,
        source="manual", created_at=now - timedelta(days=1),
    )
    return now


def names(response) -> list[str]:
    return [item["product_name"] for item in response.json()["items"]]


def test_history_query_normalises_params() -> None:
    query = HistoryQuery.from_params(
        q="  kettle ", sentiment="angry", min_score=-4, max_score=99,
        sort="random", page=0, page_size=500,
    )

    assert query == HistoryQuery(
        q="kettle", sentiment="all", min_score=1, max_score=10,
        sort="newest", page=1, page_size=50,
    )
    assert HistoryQuery.from_params(page_size=1).page_size == 5


def test_history_query_coerces_raw_strings() -> None:
    query = HistoryQuery.from_params(min_score="3.9", max_score="abc", page="2.7", page_size="")

    assert (query.min_score, query.max_score, query.page, query.page_size) == (3, 10, 2, 10)
    assert HistoryQuery.from_params(page="inf", page_size="-20").page == 1
    assert HistoryQuery.from_params(page_size="-20").page_size == 5


def test_history_non_numeric_params_fall_back_to_defaults(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    seed(make_user, make_analysis)

    response = client.get(
        "/api/v1/history",
        params={"page": "abc", "page_size": "lots", "min_score": "x", "max_score": "6.8"},
        headers=auth_headers("historian"),
    )

    assert response.status_code == 200
    assert names(response) == ["Desk Lamp", "Cheap Toaster"]
    assert response.json()["pagination"] == {
        "page": 1, "page_size": 10, "total": 2, "total_pages": 1,
    }


def test_history_defaults_to_newest_first(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    seed(make_user, make_analysis)

    response = client.get("/api/v1/history", headers=auth_headers("historian"))

    assert response.status_code == 200
    assert names(response) == ["Desk Lamp", "Cheap Toaster", "Blender Pro"]
    assert response.json()["pagination"] == {
        "page": 1, "page_size": 10, "total": 3, "total_pages": 1,
    }


def test_history_text_search_matches_name_or_source(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    seed(make_user, make_analysis)
    headers = auth_headers("historian")

    by_name = client.get("/api/v1/history", params={"q": "toast"}, headers=headers)
    by_source = client.get("/api/v1/history", params={"q": "AMAZON"}, headers=headers)

    assert names(by_name) == ["Cheap Toaster"]
    assert names(by_source) == ["Blender Pro"]


def test_history_filters_by_sentiment_and_score(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    seed(make_user, make_analysis)
    headers = auth_headers("historian")

    negative = client.get("/api/v1/history", params={"sentiment": "negative"}, headers=headers)
    unknown = client.get("/api/v1/history", params={"sentiment": "furious"}, headers=headers)
    mid_range = client.get(
        "/api/v1/history", params={"min_score": 4, "max_score": 7}, headers=headers
    )
    inverted = client.get(
        "/api/v1/history", params={"min_score": 9, "max_score": 2}, headers=headers
    )

    assert names(negative) == ["Cheap Toaster"]
    assert len(names(unknown)) == 3
    assert names(mid_range) == ["Desk Lamp"]
    assert names(inverted) == []
    assert inverted.json()["pagination"]["total_pages"] == 1


def test_history_sort_orders(client: TestClient, auth_headers, make_user, make_analysis) -> None:
    seed(make_user, make_analysis)
    headers = auth_headers("historian")

    oldest = client.get("/api/v1/history", params={"sort": "oldest"}, headers=headers)
    high = client.get("/api/v1/history", params={"sort": "score_high"}, headers=headers)
    low = client.get("/api/v1/history", params={"sort": "score_low"}, headers=headers)

    assert names(oldest) == ["Blender Pro", "Cheap Toaster", "Desk Lamp"]
    assert names(high) == ["Blender Pro", "Desk Lamp", "Cheap Toaster"]
    assert names(low) == ["Cheap Toaster", "Desk Lamp", "Blender Pro"]


def test_history_pagination_clamps_page(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    make_user("pager")
    now = datetime.now(timezone.utc)
    for index in range(12):
        make_analysis("pager", product_name=f"Item {index:02d}", created_at=now - timedelta(minutes=index))
    headers = auth_headers("pager")

    second = client.get("/api/v1/history", params={"page": 2, "page_size": 5}, headers=headers)
    beyond = client.get("/api/v1/history", params={"page": 40, "page_size": 5}, headers=headers)

    assert names(second) == [f"Item {index:02d}" for index in range(5, 10)]
    assert second.json()["pagination"] == {"page": 2, "page_size": 5, "total": 12, "total_pages": 3}
    assert names(beyond) == ["Item 10", "Item 11"]
    assert beyond.json()["pagination"]["page"] == 3


def test_history_only_returns_callers_rows(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    seed(make_user, make_analysis)

    response = client.get("/api/v1/history", headers=auth_headers("stranger"))

    assert response.json()["items"] == []
    assert response.json()["pagination"] == {
        "page": 1, "page_size": 10, "total": 0, "total_pages": 1,
    }


def test_history_detail(client: TestClient, auth_headers, make_user, make_analysis) -> None:
    make_user("owner")
    analysis = make_analysis("owner", product_name="Blender Pro", reviews_text=POSITIVE_TEXT)

    response = client.get(f"/api/v1/history/{analysis.id}", headers=auth_headers("owner"))

    assert response.status_code == 200
    item = response.json()["item"]
    assert item["id"] == str(analysis.id)
    assert item["score10"] == 8
    assert item["reviews_text"] == POSITIVE_TEXT


def test_history_detail_hides_foreign_and_missing_rows(
    client: TestClient, auth_headers, make_user, make_analysis
) -> None:
    make_user("owner")
    analysis = make_analysis("owner")
    headers = auth_headers("intruder")

    foreign = client.get(f"/api/v1/history/{analysis.id}", headers=headers)
    missing = client.get(f"/api/v1/history/{uuid.uuid4()}", headers=headers)
    malformed = client.get("/api/v1/history/not-a-uuid", headers=headers)

    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert malformed.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Analysis not found"}


def test_history_requires_authentication(client: TestClient) -> None:
    assert client.get("/api/v1/history").status_code == 401
