from __future__ import annotations

import random
import re
from datetime import datetime, timedelta, timezone

import pytest

from support.fake_supabase import FakeSupabaseClient
from usg_api.core.constants import DatabaseType
from usg_api.core.database import DatabaseClient
from usg_api.core.exceptions import RecordNotFoundError
from usg_api.models.content import InsertContent, UpdateContent
from usg_api.repositories import (
    AnnouncementRepository,
    FeedbackRepository,
    FinancialTransactionRepository,
    IssuanceRepository,
    PageContentRepository,
    SiteContentRepository,
    generate_reference_number,
)

_REFERENCE_RE = re.compile(r"^TNG-\d{8}-\d{6}$")


def _repo(client: FakeSupabaseClient, cls):
    return DatabaseClient(DatabaseType.SUPABASE, client).repository(cls)


# ------------------------------------------------------------------
# Reference numbers
# ------------------------------------------------------------------


def test_reference_number_layout() -> None:
    moment = datetime(2024, 3, 15, 14, 30, 59, tzinfo=timezone.utc)
    ref = generate_reference_number(moment, rng=random.Random(7))
    assert _REFERENCE_RE.match(ref)
    assert ref.startswith("TNG-20240315-1430")


def test_reference_number_converts_to_utc() -> None:
    manila = timezone(timedelta(hours=8))
    moment = datetime(2024, 3, 16, 1, 5, tzinfo=manila)
    assert generate_reference_number(moment).startswith("TNG-20240315-1705")


def test_reference_number_pads_random_suffix() -> None:
    class Zero:
        @staticmethod
        def randint(a: int, b: int) -> int:
            return 3

    moment = datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc)
    assert generate_reference_number(moment, rng=Zero()) == "TNG-20240102-030403"


# ------------------------------------------------------------------
# Feedback
# ------------------------------------------------------------------


async def test_create_with_reference_stamps_row() -> None:
    client = FakeSupabaseClient()
    repo = _repo(client, FeedbackRepository)

    record = await repo.create_with_reference(
        {"name": "Juan", "email": "juan@example.com", "category": "suggestion",
         "message": "More benches near the library", "anonymous": False}
    )

    assert _REFERENCE_RE.match(record["reference_number"])
    assert client.tables["feedback"][0]["reference_number"] == record["reference_number"]
    tracked = await repo.find_by_reference(record["reference_number"])
    assert tracked["id"] == record["id"]


async def test_find_by_unknown_reference_raises() -> None:
    repo = _repo(FakeSupabaseClient(), FeedbackRepository)
    with pytest.raises(RecordNotFoundError):
        await repo.find_by_reference("TNG-20000101-000000")


async def test_get_new_since_filters_on_created_at() -> None:
    client = FakeSupabaseClient(
        {
            "feedback": [
                {"id": 1, "created_at": "2024-05-01T08:00:00+00:00"},
                {"id": 2, "created_at": "2024-05-02T08:00:00+00:00"},
            ]
        }
    )
    repo = _repo(client, FeedbackRepository)
    since = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    assert [r["id"] for r in await repo.get_new_since(since)] == [2]


# ------------------------------------------------------------------
# Announcements
# ------------------------------------------------------------------


async def test_announcement_queries() -> None:
    client = FakeSupabaseClient(
        {
            "announcements": [
                {"id": 1, "category": "Event", "status": "published", "created_at": "2024-01-01"},
                {"id": 2, "category": "Event", "status": "draft", "created_at": "2024-01-03"},
                {"id": 3, "category": "News", "status": "published", "created_at": "2024-01-02"},
            ]
        }
    )
    repo = _repo(client, AnnouncementRepository)

    assert [r["id"] for r in await repo.get_all()] == [2, 3, 1]
    assert [r["id"] for r in await repo.get_published()] == [3, 1]
    assert [r["id"] for r in await repo.get_by_category("Event")] == [1]
    assert await repo.count_by_category("Event") == 1
    assert await repo.count_by_category("Event", status=None) == 2


async def test_issuance_queries() -> None:
    client = FakeSupabaseClient(
        {
            "issuances": [
                {"id": 1, "status": "published", "created_at": "2024-02-01"},
                {"id": 2, "status": "draft", "created_at": "2024-02-03"},
                {"id": 3, "status": "published", "created_at": "2024-02-02"},
            ]
        }
    )
    repo = _repo(client, IssuanceRepository)

    assert [r["id"] for r in await repo.find_by_status("published")] == [3, 1]
    assert await repo.find_by_status("archived") == []
    assert [r["id"] for r in await repo.get_recent(limit=2)] == [2, 3]
    assert [r["id"] for r in await repo.get_recent(status="published")] == [3, 1]


# ------------------------------------------------------------------
# Financial transactions
# ------------------------------------------------------------------


async def test_search_merges_and_deduplicates() -> None:
    client = FakeSupabaseClient(
        {
            "financial_transactions": [
                {"id": 1, "description": "Sports fest supplies", "category": "events", "amount": 500},
                {"id": 2, "description": "Office paper", "category": "sports", "amount": -200},
                {"id": 3, "description": "Sports jerseys", "category": "sports", "amount": 300},
                {"id": 4, "description": "Printer ink", "category": "office", "amount": 100},
            ]
        }
    )
    repo = _repo(client, FinancialTransactionRepository)

    rows = await repo.search("sport")
    assert [r["id"] for r in rows] == [1, 3, 2]
    assert await repo.get_total_budget() == 1100.0


# ------------------------------------------------------------------
# Content upsert
# ------------------------------------------------------------------


async def test_upsert_insert_and_update() -> None:
    client = FakeSupabaseClient()
    repo = _repo(client, SiteContentRepository)

    created = await repo.upsert(InsertContent({"section_type": "hero", "title": "Welcome"}))
    updated = await repo.upsert(UpdateContent(created["id"], {"title": "Hello"}))

    assert updated["id"] == created["id"]
    assert updated["title"] == "Hello"
    assert len(client.tables["site_content"]) == 1


async def test_upsert_update_of_missing_id_never_inserts() -> None:
    client = FakeSupabaseClient()
    repo = _repo(client, PageContentRepository)

    with pytest.raises(RecordNotFoundError):
        await repo.upsert(UpdateContent(404, {"title": "Ghost"}))
    assert client.tables.get("page_content", []) == []


async def test_page_content_by_slug() -> None:
    client = FakeSupabaseClient(
        {"page_content": [{"id": 1, "page": "about", "section_key": "mission", "active": True}]}
    )
    repo = _repo(client, PageContentRepository)
    assert (await repo.get_by_slug("mission"))["page"] == "about"
    with pytest.raises(RecordNotFoundError):
        await repo.get_by_slug("vision")
