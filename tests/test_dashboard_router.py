# /tests/test_dashboard_router.py

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from tms.main import create_app
from tms.models.dashboard_model import ActivityItem, AdminDashboardStats, BedriftDashboardStats
from tms.services.dashboard_helpers.scope import AdminScope, BedriftScope, ElevScope
from tms.services.dashboard_helpers.system_health import placeholder_system_health
from tms.services.dashboard_service import ElevNotFoundError, get_dashboard_service

ADMIN = {"X-User-Role": "ADMIN", "X-User-Id": "1"}
HOVEDBRUKER = {"X-User-Role": "HOVEDBRUKER", "X-User-Id": "2", "X-Bedrift-Id": "7"}
ELEV = {"X-User-Role": "ELEV", "X-User-Id": "3", "X-Elev-Id": "11"}


def _bedrift_stats(**overrides) -> BedriftDashboardStats:
    values = dict(
        totalAnsatte=0, totalElever=0, aktiveSikkerhetskontroller=0, fullforteKontroller=0,
        ventendeSoknader=0, aktiverKontrakter=0, totalInntekter=0, aktivKjoretoy=0,
        planlagteTimer=0, fullforteTimer=0, ventendeTasks=0, systemNotifikasjoner=0,
    )
    values.update(overrides)
    return BedriftDashboardStats(**values)


def _admin_stats() -> AdminDashboardStats:
    return AdminDashboardStats(
        totalBedrifter=3, activeBedrifter=2, totalBrukere=10, activeServices=4,
        totalSikkerhetskontroller=5, totalKontrakter=6, totalElever=7, totalAnsatte=8,
        systemHealth=placeholder_system_health(),
    )


@pytest.fixture
def mock_dashboard_service():
    """A DashboardService double; every coroutine method is an AsyncMock."""
    service = MagicMock()
    for name in (
        "get_dashboard_stats",
        "get_recent_activity",
        "get_admin_dashboard_stats",
        "get_admin_recent_activity",
        "get_bedrift_dashboard_stats",
        "get_bedrift_recent_activity",
        "get_bedrift_upcoming_events",
        "get_elev_dashboard_stats",
        "get_elev_recent_activity",
        "get_elev_upcoming_lessons",
        "get_elev_recent_achievements",
        "get_elev_sikkerhetskontroll_progress",
    ):
        setattr(service, name, AsyncMock(return_value=[]))
    return service


@pytest.fixture
def client(mock_dashboard_service):
    app = create_app()
    app.dependency_overrides[get_dashboard_service] = lambda: mock_dashboard_service
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Authentication and authorization ---

def test_missing_role_header_is_401(client):
    response = client.get("/api/dashboard/admin/stats")
    assert response.status_code == 401


def test_unknown_role_is_403(client):
    response = client.get("/api/dashboard/admin/stats", headers={"X-User-Role": "HACKER"})
    assert response.status_code == 403


@pytest.mark.parametrize("path, headers", [
    ("/api/dashboard/admin/stats", HOVEDBRUKER),
    ("/api/dashboard/admin/activities", ELEV),
    ("/api/dashboard/bedrift/stats", ELEV),
    ("/api/dashboard/elev/stats", HOVEDBRUKER),
    ("/api/dashboard/elev/achievements", ADMIN),
])
def test_wrong_role_is_403(client, mock_dashboard_service, path, headers):
    response = client.get(path, headers=headers)

    assert response.status_code == 403
    assert response.json() == {"detail": "Unauthorized"}


def test_bedrift_route_without_bedrift_id_is_400(client, mock_dashboard_service):
    response = client.get("/api/dashboard/bedrift/stats", headers={"X-User-Role": "TRAFIKKLARER"})

    assert response.status_code == 400
    assert response.json() == {"detail": "BedriftId is required"}
    mock_dashboard_service.get_bedrift_dashboard_stats.assert_not_called()


def test_elev_route_without_elev_id_is_400(client):
    response = client.get("/api/dashboard/elev/stats", headers={"X-User-Role": "ELEV"})

    assert response.status_code == 400
    assert response.json() == {"detail": "ElevId is required"}


# --- Successful calls ---

def test_bedrift_stats_uses_the_callers_bedrift(client, mock_dashboard_service):
    mock_dashboard_service.get_bedrift_dashboard_stats.return_value = _bedrift_stats(totalInntekter=5000)

    response = client.get("/api/dashboard/bedrift/stats", headers=HOVEDBRUKER)

    assert response.status_code == 200
    assert response.json()["totalInntekter"] == 5000
    mock_dashboard_service.get_bedrift_dashboard_stats.assert_awaited_once_with(7)


def test_admin_may_read_bedrift_routes(client, mock_dashboard_service):
    response = client.get("/api/dashboard/bedrift/upcoming-events", headers={**ADMIN, "X-Bedrift-Id": "7"})

    assert response.status_code == 200
    assert response.json() == []
    mock_dashboard_service.get_bedrift_upcoming_events.assert_awaited_once_with(7, 10)


def test_activity_limit_is_passed_through(client, mock_dashboard_service):
    mock_dashboard_service.get_elev_recent_activity.return_value = [
        ActivityItem(
            id="achievement-1",
            type="achievement",
            beskrivelse="Ny prestasjon oppnådd: Lysmester",
            tidspunkt=datetime(2025, 3, 15, 11, 0, tzinfo=timezone.utc),
            status="success",
            xpGain=25,
        )
    ]

    response = client.get("/api/dashboard/elev/activities?limit=3", headers=ELEV)

    assert response.status_code == 200
    body = response.json()
    assert body[0]["id"] == "achievement-1"
    assert body[0]["xpGain"] == 25
    mock_dashboard_service.get_elev_recent_activity.assert_awaited_once_with(11, 3)


def test_achievements_default_to_five(client, mock_dashboard_service):
    client.get("/api/dashboard/elev/achievements", headers=ELEV)
    mock_dashboard_service.get_elev_recent_achievements.assert_awaited_once_with(11, 5)


@pytest.mark.parametrize("limit", [0, 101, "many"])
def test_invalid_limit_is_422(client, limit):
    response = client.get(f"/api/dashboard/admin/activities?limit={limit}", headers=ADMIN)
    assert response.status_code == 422


# --- Role-dispatched routes ---

@pytest.mark.parametrize("headers, expected_scope", [
    (ADMIN, AdminScope()),
    ({"X-User-Role": "SYSTEM_ADMIN"}, AdminScope()),
    (HOVEDBRUKER, BedriftScope(7)),
    (ELEV, ElevScope(11)),
])
def test_activities_dispatch_on_caller_role(client, mock_dashboard_service, headers, expected_scope):
    response = client.get("/api/dashboard/activities", headers=headers)

    assert response.status_code == 200
    mock_dashboard_service.get_recent_activity.assert_awaited_once_with(expected_scope, 10)


def test_stats_returns_the_admin_snapshot_for_admins(client, mock_dashboard_service):
    mock_dashboard_service.get_dashboard_stats.return_value = _admin_stats()

    response = client.get("/api/dashboard/stats", headers=ADMIN)

    assert response.status_code == 200
    body = response.json()
    assert body["totalBedrifter"] == 3
    assert body["systemHealth"]["synthetic"] is True


def test_stats_without_a_resolvable_scope_is_403(client):
    response = client.get("/api/dashboard/stats", headers={"X-User-Role": "TRAFIKKLARER"})
    assert response.status_code == 403


# --- Error translation ---

def test_missing_elev_is_404(client, mock_dashboard_service):
    mock_dashboard_service.get_elev_dashboard_stats.side_effect = ElevNotFoundError(11)

    response = client.get("/api/dashboard/elev/stats", headers=ELEV)

    assert response.status_code == 404
    assert response.json() == {"detail": "Elev not found"}


def test_unexpected_failure_is_a_generic_500(client, mock_dashboard_service):
    mock_dashboard_service.get_admin_dashboard_stats.side_effect = RuntimeError("password=hunter2")

    response = client.get("/api/dashboard/admin/stats", headers=ADMIN)

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to fetch admin dashboard statistics"}


def test_root_health_check(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "TMS Dashboard API is running!"


def test_dashboard_health_needs_no_caller(client, mock_dashboard_service):
    response = client.get("/api/dashboard/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["service"] == "dashboard-api"
    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None
    mock_dashboard_service.assert_not_called()
