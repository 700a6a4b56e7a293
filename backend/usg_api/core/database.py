from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, TypeVar

from psycopg_pool import AsyncConnectionPool
from supabase import acreate_client

from usg_api.core.config import Settings
from usg_api.core.constants import DatabaseType
from usg_api.core.exceptions import ConfigError, DatabaseError
from usg_api.core.logging import get_logger
from usg_api.repositories.base import BaseRepository
from usg_api.repositories.postgres import PostgresRepository
from usg_api.repositories.supabase import SupabaseRepository

logger = get_logger(__name__)

RepoT = TypeVar("RepoT", bound=BaseRepository)

_BACKENDS: dict[DatabaseType, type[BaseRepository]] = {
    DatabaseType.SUPABASE: SupabaseRepository,
    DatabaseType.POSTGRES: PostgresRepository,
}


@lru_cache(maxsize=None)
def bind_repository(domain_cls: type[RepoT], backend_cls: type[BaseRepository]) -> type[RepoT]:
    """Combine an entity repository with a backend adapter.

    Entity classes only declare ``table_name`` and domain queries; the
    backend supplies the primitive operations.  The combined class is
    cached so each pair is built once.
    """
    name = f"{backend_cls.__name__.removesuffix('Repository')}{domain_cls.__name__}"
    return type(name, (domain_cls, backend_cls), {})  # type: ignore[return-value]


class DatabaseClient:
    """Process-wide datastore handle.

    Holds either a Supabase async client or a psycopg connection pool,
    chosen once from ``DB_TYPE``.  Repositories built through
    :meth:`repository` share this one handle.
    """

    def __init__(self, db_type: DatabaseType, client: Any) -> None:
        self._db_type = db_type
        self._client = client

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    async def connect(cls, settings: Settings) -> DatabaseClient:
        db_type = settings.database_type

        if db_type is DatabaseType.SUPABASE:
            if not settings.supabase_url or not settings.supabase_service_key:
                raise ConfigError("SUPABASE_URL and SUPABASE_SERVICE_KEY are required")
            try:
                client = await acreate_client(
                    settings.supabase_url, settings.supabase_service_key
                )
            except Exception as exc:
                raise DatabaseError(f"Failed to create Supabase client: {exc}") from exc
            logger.info("Connected to Supabase at %s", settings.supabase_url)
            return cls(db_type, client)

        pool = AsyncConnectionPool(
            settings.postgres_conninfo,
            min_size=settings.postgres_pool_min,
            max_size=settings.postgres_pool_max,
            open=False,
        )
        try:
            await pool.open(wait=True)
        except Exception as exc:
            raise DatabaseError(f"Failed to open PostgreSQL pool: {exc}") from exc
        logger.info(
            "Connected to PostgreSQL at %s:%s/%s (pool %d-%d)",
            settings.postgres_host,
            settings.postgres_port,
            settings.postgres_db,
            settings.postgres_pool_min,
            settings.postgres_pool_max,
        )
        return cls(db_type, pool)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def db_type(self) -> DatabaseType:
        return self._db_type

    def repository(self, domain_cls: type[RepoT]) -> RepoT:
        backend_cls = _BACKENDS[self._db_type]
        return bind_repository(domain_cls, backend_cls)(self._client)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        try:
            if self._db_type is DatabaseType.POSTGRES:
                await self._client.close()
            else:
                postgrest: Optional[Any] = getattr(self._client, "postgrest", None)
                if postgrest is not None:
                    await postgrest.aclose()
            logger.info("Datastore connection closed")
        except Exception as exc:
            logger.warning("Error closing datastore connection: %s", exc)
