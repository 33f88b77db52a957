from fastapi.testclient import TestClient

from robots_intellect.enterprise.core import Robot
from robots_intellect.persistence import InMemoryRepository
from robots_intellect.server.app import app
from robots_intellect.server.dependencies import get_repository, reset_repository


client = TestClient(app)


def setup_function() -> None:
    reset_repository()
    app.dependency_overrides.clear()


def teardown_function() -> None:
    app.dependency_overrides.clear()


def test_health_endpoints() -> None:
    live = client.get("/api/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/api/health/ready")
    assert ready.status_code == 200
    assert ready.json()["status"] == "ready"


def test_ready_reports_unreachable_store() -> None:
    class UnreachableRepository(InMemoryRepository):
        async def ping(self) -> bool:
            return False

    app.dependency_overrides[get_repository] = lambda: UnreachableRepository(Robot)

    ready = client.get("/api/health/ready")
    assert ready.status_code == 503
    assert ready.json()["status"] == "unavailable"


def test_root() -> None:
    assert client.get("/").json() == {"message": "Robots Intellect API"}
