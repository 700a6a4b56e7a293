from __future__ import annotations

from typing import Optional

from fastapi import Request

from usg_api.core.config import Settings
from usg_api.core.exceptions import ForbiddenError, UnauthorizedError
from usg_api.models.auth import AuthUser
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
from usg_api.services.auth import AuthService
from usg_api.services.datastore import Datastore


def get_settings(request: Request) -> Settings:
    """Provide the application ``Settings`` instance."""
    return request.app.state.settings


def get_datastore(request: Request) -> Datastore:
    """Provide the repository facade bound at startup."""
    return request.app.state.datastore


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


# ------------------------------------------------------------------
# Identity
# ------------------------------------------------------------------


def get_optional_user(request: Request) -> Optional[AuthUser]:
    """Identity attached by ``AuthMiddleware``, or ``None`` for anonymous calls."""
    return getattr(request.state, "user", None)


def get_current_user(request: Request) -> AuthUser:
    """Return the authenticated user or raise 401."""
    user = get_optional_user(request)
    if user is None:
        raise UnauthorizedError("Authentication required")
    return user


def is_admin_request(request: Request) -> bool:
    auth_service: Optional[AuthService] = getattr(request.app.state, "auth_service", None)
    return auth_service is not None and auth_service.is_admin(get_optional_user(request))


def require_admin(request: Request) -> AuthUser:
    user = get_current_user(request)
    if not is_admin_request(request):
        raise ForbiddenError("Admin access required. Only UNC emails are allowed.")
    return user


# ------------------------------------------------------------------
# Repository dependencies
# ------------------------------------------------------------------


def get_announcement_repo(request: Request) -> AnnouncementRepository:
    return get_datastore(request).announcements


def get_committee_repo(request: Request) -> CommitteeRepository:
    return get_datastore(request).committees


def get_feedback_repo(request: Request) -> FeedbackRepository:
    return get_datastore(request).feedback


def get_financial_transaction_repo(request: Request) -> FinancialTransactionRepository:
    return get_datastore(request).financial_transactions


def get_governance_document_repo(request: Request) -> GovernanceDocumentRepository:
    return get_datastore(request).governance_documents


def get_issuance_repo(request: Request) -> IssuanceRepository:
    return get_datastore(request).issuances


def get_officer_repo(request: Request) -> OfficerRepository:
    return get_datastore(request).officers


def get_organization_repo(request: Request) -> OrganizationRepository:
    return get_datastore(request).organizations


def get_page_content_repo(request: Request) -> PageContentRepository:
    return get_datastore(request).page_content


def get_site_content_repo(request: Request) -> SiteContentRepository:
    return get_datastore(request).site_content
