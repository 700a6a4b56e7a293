from __future__ import annotations

from enum import Enum


class DatabaseType(str, Enum):
    SUPABASE = "supabase"
    POSTGRES = "postgres"


class Environment(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class FeedbackCategory(str, Enum):
    SUGGESTION = "suggestion"
    COMPLAINT = "complaint"
    INQUIRY = "inquiry"
    OTHER = "other"


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class AnnouncementCategory(str, Enum):
    EVENT = "Event"
    ACCOMPLISHMENT = "Accomplishment"
    NEWS = "News"
    ANNOUNCEMENT = "Announcement"
    OTHER = "Other"


class PublishStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class GovernanceDocumentType(str, Enum):
    CONSTITUTION = "constitution"
    BYLAWS = "bylaws"
    RESOLUTION = "resolution"
    POLICY = "policy"
    OTHER = "other"


class IssuanceType(str, Enum):
    EXECUTIVE_ORDER = "executive_order"
    MEMORANDUM = "memorandum"
    RESOLUTION = "resolution"
    PROCLAMATION = "proclamation"
    OTHER = "other"


# ── Datastore ─────────────────────────────────────────────────────────
DEFAULT_POSTGRES_HOST: str = "localhost"
DEFAULT_POSTGRES_PORT: int = 5432
DEFAULT_POSTGRES_DB: str = "unc_sg"
DEFAULT_POSTGRES_USER: str = "postgres"
DEFAULT_POOL_MIN_SIZE: int = 1
DEFAULT_POOL_MAX_SIZE: int = 10

# PostgREST / SQLSTATE codes the error formatter understands
PGRST_NO_ROWS: str = "PGRST116"
PGRST_JWT_INVALID: str = "PGRST301"
PG_UNIQUE_VIOLATION: str = "23505"
PG_FOREIGN_KEY_VIOLATION: str = "23503"
PG_NOT_NULL_VIOLATION: str = "23502"
PG_CHECK_VIOLATION: str = "23514"
PG_INVALID_TEXT_REPRESENTATION: str = "22P02"

# ── Feedback ──────────────────────────────────────────────────────────
REFERENCE_PREFIX: str = "TNG"
NOTIFICATION_LOOKBACK_HOURS: int = 24

# ── Statistics ────────────────────────────────────────────────────────
STATS_EVENT_CATEGORY: str = AnnouncementCategory.EVENT.value
STATS_ACCOMPLISHMENT_CATEGORY: str = AnnouncementCategory.ACCOMPLISHMENT.value

# ── Security: Authentication ──────────────────────────────────────────
DEFAULT_ADMIN_EMAIL_DOMAIN: str = "@unc.edu.ph"
AUTH_USER_ENDPOINT: str = "/auth/v1/user"

# ── Security: CORS ────────────────────────────────────────────────────
DEFAULT_CORS_ORIGINS: list[str] = ["http://localhost:5173"]

# ── Security: Rate Limiting ───────────────────────────────────────────
# (max requests, window seconds)
GENERAL_RATE_LIMIT: tuple[int, int] = (100, 15 * 60)
ADMIN_RATE_LIMIT: tuple[int, int] = (200, 15 * 60)
FEEDBACK_RATE_LIMIT: tuple[int, int] = (5, 60 * 60)
AUTH_RATE_LIMIT: tuple[int, int] = (5, 15 * 60)
MAX_TRACKED_CLIENTS: int = 10_000

# ── Pagination ────────────────────────────────────────────────────────
DEFAULT_ISSUANCE_LIMIT: int = 10
DEFAULT_TRANSACTION_LIMIT: int = 50
MAX_PAGE_LIMIT: int = 500

# ── Logging ───────────────────────────────────────────────────────────
LOG_MAX_SIZE_BYTES: int = 100 * 1024 * 1024  # 100 MB
LOG_RETENTION_DAYS: int = 30
