from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from conftest import make_settings
from support.fake_supabase import FakeSupabaseClient
from usg_api import main
from usg_api.core.constants import DatabaseType
from usg_api.core.database import DatabaseClient
from usg_api.core.exceptions import ConfigError
from usg_api.services.datastore import Datastore


def test_lifespan_binds_and_releases_state(monkeypatch) -> None:
    fake = FakeSupabaseClient()

    async def fake_connect(cls, settings):
        return cls(DatabaseType.SUPABASE, fake)

    monkeypatch.setattr(DatabaseClient, "connect", classmethod(fake_connect))

    app = main.create_app(make_settings())
    with TestClient(app) as client:
        assert isinstance(app.state.datastore, Datastore)
        assert set(app.state.rate_limiters) == {"general", "admin", "feedback", "auth"}
        assert client.get("/api/committees").json() == {"success": True, "data": []}

    assert app.state.http_client._session is None


def test_lifespan_refuses_incomplete_environment() -> None:
    app = main.create_app(make_settings(supabase_service_key=None))
    with pytest.raises(ConfigError):
        with TestClient(app):
            pass


def test_run_exits_on_missing_configuration(monkeypatch) -> None:
    monkeypatch.setattr(main, "load_settings", lambda: make_settings(db_type="postgres"))
    monkeypatch.setattr(main.uvicorn, "run", lambda *a, **kw: pytest.fail("server started"))
    with pytest.raises(SystemExit) as exc_info:
        main.run()
    assert exc_info.value.code == 1
