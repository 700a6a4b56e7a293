from __future__ import annotations

from usg_api.repositories.announcement import AnnouncementRepository
from usg_api.repositories.base import BaseRepository
from usg_api.repositories.committee import CommitteeRepository
from usg_api.repositories.content import ContentRepository
from usg_api.repositories.feedback import FeedbackRepository, generate_reference_number
from usg_api.repositories.financial_transaction import FinancialTransactionRepository
from usg_api.repositories.governance_document import GovernanceDocumentRepository
from usg_api.repositories.issuance import IssuanceRepository
from usg_api.repositories.officer import OfficerRepository
from usg_api.repositories.organization import OrganizationRepository
from usg_api.repositories.page_content import PageContentRepository
from usg_api.repositories.postgres import PostgresRepository
from usg_api.repositories.site_content import SiteContentRepository
from usg_api.repositories.supabase import SupabaseRepository

__all__ = [
    "BaseRepository",
    "SupabaseRepository",
    "PostgresRepository",
    "ContentRepository",
    "AnnouncementRepository",
    "CommitteeRepository",
    "FeedbackRepository",
    "FinancialTransactionRepository",
    "GovernanceDocumentRepository",
    "IssuanceRepository",
    "OfficerRepository",
    "OrganizationRepository",
    "PageContentRepository",
    "SiteContentRepository",
    "generate_reference_number",
]
