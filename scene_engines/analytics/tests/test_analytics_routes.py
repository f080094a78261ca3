from datetime import datetime, timezone

from fastapi.testclient import TestClient

from scene_engines.analytics.routes import get_analytics_service
from scene_engines.analytics.service import ViewAnalyticsService
from scene_engines.document_store.repository import InMemoryDocumentStore
from scene_engines.identity.auth import get_user_directory
from scene_engines.identity.users import UserDirectory
from scene_engines.server import create_app

HEADERS = {"Authorization": "Bearer tok"}


def _client():
    store = InMemoryDocumentStore(
        {
            "counters": {
                "daily": {"20240115": {"s1": {"views": 3}}, "20240220": {"s1": {"views": 5}}},
                "globalTotals": {"s1": {"title": "Lobby", "views": 8}},
            },
            "users": {"a": {"role": "Admin"}, "b": {"role": "Staff"}, "c": {"Role": "staff"}},
        }
    )
    app = create_app()
    clock = lambda: datetime(2024, 2, 28, tzinfo=timezone.utc)  # noqa: E731
    app.dependency_overrides[get_analytics_service] = lambda: ViewAnalyticsService(store=store, clock=clock)
    app.dependency_overrides[get_user_directory] = lambda: UserDirectory(store=store)
    return TestClient(app)


def test_performance_series():
    resp = _client().get("/analytics/performance", headers=HEADERS)
    assert resp.status_code == 200
    assert resp.json()[-2:] == [{"month": "2024-01", "count": 3}, {"month": "2024-02", "count": 5}]
    assert resp.json()[0] == {"month": "2023-09", "count": 0}


def test_forecast_payload():
    body = _client().get("/analytics/forecast", headers=HEADERS).json()
    assert len(body["history"]) == 6
    assert [p["month"] for p in body["forecast"]] == ["2024-03", "2024-04", "2024-05"]
    assert [p["predicted"] for p in body["forecast"]] == [7, 9, 11]


def test_top_scenes_and_roles():
    client = _client()
    assert client.get("/analytics/top-scenes", headers=HEADERS).json() == {"labels": ["Lobby"], "counts": [8]}
    assert client.get("/analytics/user-roles", headers=HEADERS).json() == {"admin": 1, "staff": 2}


def test_analytics_requires_bearer():
    assert _client().get("/analytics/performance").status_code == 401
