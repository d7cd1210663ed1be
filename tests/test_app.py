import logging

from fastapi.testclient import TestClient

import main
from core import db
from core.log import configure_logging
from main import create_app


class _PingDatabase:
    def __init__(self, healthy: bool) -> None:
        self.healthy = healthy

    async def ping(self) -> bool:
        return self.healthy


def test_health_and_root(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json() == {"message": "blogpost api"}


def test_db_health_reports_ping(app):
    client = TestClient(app)
    app.state.database = _PingDatabase(True)
    assert client.get("/health/db").status_code == 200

    app.state.database = _PingDatabase(False)
    r = client.get("/health/db")
    assert r.status_code == 503
    assert r.json() == {"status": "unavailable"}


def test_db_health_without_database_is_503(client):
    assert client.get("/health/db").status_code == 503


def test_lifespan_opens_schema_and_closes_pool(settings, fake_pool, monkeypatch):
    async def fake_create_pool(**kwargs):
        return fake_pool

    monkeypatch.setattr(db.asyncpg, "create_pool", fake_create_pool)
    fake_pool.connection.execute_result = "CREATE TABLE"
    fake_pool.connection.fetch_result = []

    app = create_app(settings)
    with TestClient(app) as client:
        assert isinstance(app.state.database, db.Database)
        assert client.get("/blogpost").json() == []

    statements = [sql for _, sql, _ in fake_pool.connection.calls]
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS blog_posts")
    assert fake_pool.closed


def test_module_level_app_exists():
    assert main.app.title == "blogpost-api"


def test_configure_logging_does_not_stack_handlers():
    root = logging.getLogger()
    configure_logging("DEBUG")
    handlers = list(root.handlers)
    configure_logging("WARNING")
    assert root.handlers == handlers
    assert root.level == logging.WARNING


def test_configure_logging_ignores_unknown_level():
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO
