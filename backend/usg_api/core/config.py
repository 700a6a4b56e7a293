from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from psycopg.conninfo import make_conninfo
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from usg_api.core.constants import (
    DEFAULT_ADMIN_EMAIL_DOMAIN,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_POOL_MAX_SIZE,
    DEFAULT_POOL_MIN_SIZE,
    DEFAULT_POSTGRES_DB,
    DEFAULT_POSTGRES_HOST,
    DEFAULT_POSTGRES_PORT,
    DEFAULT_POSTGRES_USER,
    DatabaseType,
    Environment,
)
from usg_api.core.exceptions import ConfigError

_SUPPORTED_DB_TYPES: dict[str, DatabaseType] = {
    "supabase": DatabaseType.SUPABASE,
    "postgres": DatabaseType.POSTGRES,
    "postgresql": DatabaseType.POSTGRES,
}

_REQUIRED_BY_BACKEND: dict[DatabaseType, tuple[str, ...]] = {
    DatabaseType.SUPABASE: ("supabase_url", "supabase_service_key"),
    DatabaseType.POSTGRES: (
        "postgres_host",
        "postgres_port",
        "postgres_db",
        "postgres_user",
        "postgres_password",
    ),
}


class Settings(BaseSettings):
    """Process configuration read from the environment and ``.env``.

    Field names map case-insensitively onto environment variables, so
    ``supabase_url`` is populated from ``SUPABASE_URL``.
    """

    db_type: str = "supabase"
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = Field(
        default=Environment.DEVELOPMENT.value,
        validation_alias=AliasChoices("environment", "node_env"),
    )

    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None

    postgres_host: Optional[str] = None
    postgres_port: Optional[int] = None
    postgres_db: Optional[str] = None
    postgres_user: Optional[str] = None
    postgres_password: Optional[str] = None
    postgres_ssl: bool = False
    postgres_pool_min: int = DEFAULT_POOL_MIN_SIZE
    postgres_pool_max: int = DEFAULT_POOL_MAX_SIZE

    admin_email_domain: str = DEFAULT_ADMIN_EMAIL_DOMAIN
    cors_allowed_origins: str = ",".join(DEFAULT_CORS_ORIGINS)
    trusted_proxies: str = ""

    log_dir: Optional[str] = "logs"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Derived helpers
    # ------------------------------------------------------------------

    @property
    def database_type(self) -> DatabaseType:
        try:
            return _SUPPORTED_DB_TYPES[self.db_type.strip().lower()]
        except KeyError:
            raise ConfigError(
                f"Invalid DB_TYPE: {self.db_type}. Must be 'supabase' or 'postgres'"
            ) from None

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == Environment.PRODUCTION.value

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip().rstrip("/") for o in self.cors_allowed_origins.split(",") if o.strip()]

    @property
    def trusted_proxy_list(self) -> list[str]:
        return [p.strip() for p in self.trusted_proxies.split(",") if p.strip()]

    @property
    def postgres_conninfo(self) -> str:
        parts = {
            "host": self.postgres_host or DEFAULT_POSTGRES_HOST,
            "port": self.postgres_port or DEFAULT_POSTGRES_PORT,
            "dbname": self.postgres_db or DEFAULT_POSTGRES_DB,
            "user": self.postgres_user or DEFAULT_POSTGRES_USER,
            "password": self.postgres_password,
            "sslmode": "require" if self.postgres_ssl else "disable",
        }
        return make_conninfo(**{k: v for k, v in parts.items() if v is not None})

    def missing_required(self) -> list[str]:
        """Return the environment variable names the selected backend needs but lacks."""
        fields = _REQUIRED_BY_BACKEND[self.database_type]
        return [name.upper() for name in fields if getattr(self, name) in (None, "")]


def load_settings(env_path: Path | str = ".env") -> Settings:
    """Load ``.env`` into the process environment and build :class:`Settings`."""
    load_dotenv(dotenv_path=Path(env_path), override=False)
    return Settings()


def validate_environment(settings: Settings) -> None:
    """Fail fast when the selected backend is unknown or under-configured."""
    db_type = settings.database_type
    missing = settings.missing_required()
    if missing:
        raise ConfigError(
            "Missing required environment variables for "
            f"DB_TYPE={db_type.value}: {', '.join(missing)}. "
            "Please check your .env file and try again."
        )
