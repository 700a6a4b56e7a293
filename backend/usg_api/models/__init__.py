from __future__ import annotations

from usg_api.models.announcement import AnnouncementCreate, AnnouncementUpdate
from usg_api.models.auth import AuthUser
from usg_api.models.base import BaseModel as AppBaseModel
from usg_api.models.base import WriteModel
from usg_api.models.committee import CommitteeCreate, CommitteeUpdate
from usg_api.models.content import (
    ContentOperation,
    InsertContent,
    PageContentUpdate,
    PageContentUpsert,
    SiteContentUpdate,
    SiteContentUpsert,
    UpdateContent,
)
from usg_api.models.feedback import FeedbackCreate, FeedbackUpdate
from usg_api.models.financial_transaction import (
    FinancialTransactionCreate,
    FinancialTransactionUpdate,
)
from usg_api.models.governance_document import (
    GovernanceDocumentCreate,
    GovernanceDocumentUpdate,
)
from usg_api.models.issuance import IssuanceCreate, IssuanceUpdate
from usg_api.models.officer import OfficerCreate, OfficerUpdate
from usg_api.models.organization import OrganizationCreate, OrganizationUpdate
from usg_api.models.stats import AutomatedStats

__all__ = [
    "AppBaseModel",
    "WriteModel",
    "AuthUser",
    "AnnouncementCreate",
    "AnnouncementUpdate",
    "CommitteeCreate",
    "CommitteeUpdate",
    "ContentOperation",
    "InsertContent",
    "UpdateContent",
    "SiteContentUpsert",
    "SiteContentUpdate",
    "PageContentUpsert",
    "PageContentUpdate",
    "FeedbackCreate",
    "FeedbackUpdate",
    "FinancialTransactionCreate",
    "FinancialTransactionUpdate",
    "GovernanceDocumentCreate",
    "GovernanceDocumentUpdate",
    "IssuanceCreate",
    "IssuanceUpdate",
    "OfficerCreate",
    "OfficerUpdate",
    "OrganizationCreate",
    "OrganizationUpdate",
    "AutomatedStats",
]
