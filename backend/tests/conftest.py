from __future__ import annotations

from typing import Any, Optional

import pytest
from fastapi.testclient import TestClient

from support.fake_pg import FakePool
from support.fake_supabase import FakeSupabaseClient
from usg_api.core.config import Settings
from usg_api.core.constants import DatabaseType
from usg_api.core.database import DatabaseClient
from usg_api.core.exceptions import UpstreamAuthError
from usg_api.core.rate_limiter import RateLimiterFactory
from usg_api.main import create_app
from usg_api.services.auth import AuthService
from usg_api.services.datastore import Datastore

ADMIN_TOKEN = "admin-token"
STUDENT_TOKEN = "student-token"

_USERS: dict[str, dict[str, Any]] = {
    ADMIN_TOKEN: {"id": "u-admin", "email": "officer@unc.edu.ph", "role": "authenticated"},
    STUDENT_TOKEN: {"id": "u-student", "email": "student@gmail.com", "role": "authenticated"},
}


class FakeHttpClient:
    """Answers ``GET /auth/v1/user`` from a fixed token table."""

    def __init__(self, users: Optional[dict[str, dict[str, Any]]] = None) -> None:
        self.users = dict(_USERS if users is None else users)
        self.requests: list[tuple[str, dict[str, str]]] = []

    async def get(self, url: str, *, service: str = "unknown", headers: Optional[dict] = None, **_: Any):
        headers = headers or {}
        self.requests.append((url, headers))
        token = headers.get("Authorization", "").removeprefix("Bearer ")
        if token not in self.users:
            raise UpstreamAuthError(service=service, status_code=401, message="invalid JWT")
        return dict(self.users[token])


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "db_type": "supabase",
        "supabase_url": "https://project.supabase.test",
        "supabase_service_key": "service-key",
        "environment": "test",
        "log_dir": None,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def supabase_client() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def pg_pool() -> FakePool:
    return FakePool()


@pytest.fixture
def datastore(supabase_client: FakeSupabaseClient) -> Datastore:
    return Datastore(DatabaseClient(DatabaseType.SUPABASE, supabase_client))


@pytest.fixture
def http_client() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def auth_service(settings: Settings, http_client: FakeHttpClient) -> AuthService:
    return AuthService(settings, http_client)  # type: ignore[arg-type]


@pytest.fixture
def app(settings: Settings, datastore: Datastore, auth_service: AuthService):
    """Application with state bound directly; the lifespan is not run."""
    application = create_app(settings)
    application.state.datastore = datastore
    application.state.db = datastore.db
    application.state.auth_service = auth_service
    application.state.rate_limiters = RateLimiterFactory.create_all()
    return application


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def student_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {STUDENT_TOKEN}"}
