from __future__ import annotations

import asyncio

from usg_api.core.constants import (
    STATS_ACCOMPLISHMENT_CATEGORY,
    STATS_EVENT_CATEGORY,
)
from usg_api.core.database import DatabaseClient
from usg_api.core.logging import get_logger
from usg_api.models.stats import AutomatedStats
from usg_api.repositories import (
    AnnouncementRepository,
    CommitteeRepository,
    FeedbackRepository,
    FinancialTransactionRepository,
    GovernanceDocumentRepository,
    IssuanceRepository,
    OfficerRepository,
    OrganizationRepository,
    PageContentRepository,
    SiteContentRepository,
)

logger = get_logger(__name__)


class Datastore:
    """Every entity repository for one backend, plus cross-table reads."""

    def __init__(self, db: DatabaseClient) -> None:
        self._db = db
        self.announcements = db.repository(AnnouncementRepository)
        self.committees = db.repository(CommitteeRepository)
        self.feedback = db.repository(FeedbackRepository)
        self.financial_transactions = db.repository(FinancialTransactionRepository)
        self.governance_documents = db.repository(GovernanceDocumentRepository)
        self.issuances = db.repository(IssuanceRepository)
        self.officers = db.repository(OfficerRepository)
        self.organizations = db.repository(OrganizationRepository)
        self.page_content = db.repository(PageContentRepository)
        self.site_content = db.repository(SiteContentRepository)

    @property
    def db(self) -> DatabaseClient:
        return self._db

    async def get_automated_stats(self) -> AutomatedStats:
        """Dashboard counters gathered concurrently.

        Any failing read fails the whole call; partial stats are never
        returned.
        """
        events, accomplishments, budget, organizations = await asyncio.gather(
            self.announcements.count_by_category(STATS_EVENT_CATEGORY),
            self.announcements.count_by_category(STATS_ACCOMPLISHMENT_CATEGORY),
            self.financial_transactions.get_total_budget(),
            self.organizations.count_active(),
        )
        logger.debug(
            "Automated stats: events=%d accomplishments=%d budget=%.2f orgs=%d",
            events,
            accomplishments,
            budget,
            organizations,
        )
        return AutomatedStats(
            events_count=events,
            accomplishments_count=accomplishments,
            total_budget=budget,
            organizations_count=organizations,
        )
